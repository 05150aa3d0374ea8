"""Tests for langcache.storage.memory module."""

import threading

import pytest

from langcache.storage import InMemoryStorage, StorageBackend, StorageError


@pytest.mark.unit
class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_is_storage_backend(self, memory_storage):
        assert isinstance(memory_storage, StorageBackend)

    def test_write_and_read(self, memory_storage):
        """read() returns what write() stored."""
        memory_storage.write("lang/de.yml", b"save: Speichern")
        assert memory_storage.read("lang/de.yml") == b"save: Speichern"
        assert memory_storage.exists("lang/de.yml") is True

    def test_paths_are_normalized(self, memory_storage):
        """Equivalent spellings of a path refer to the same file."""
        memory_storage.write("./lang//de.yml", b"x")
        assert memory_storage.exists("lang/de.yml")
        assert memory_storage.read("lang/sub/../de.yml") == b"x"
        assert memory_storage.exists("lang\\de.yml")

    def test_read_missing(self, memory_storage):
        """Reading a missing file raises StorageError."""
        with pytest.raises(StorageError) as exc_info:
            memory_storage.read("missing.yml")
        assert exc_info.value.path == "missing.yml"
        assert exc_info.value.operation == "read"

    def test_write_records_clock_time(self, memory_storage, clock):
        """Each write is stamped with the current clock time."""
        memory_storage.write("a.yml", b"")
        clock.advance(5)
        memory_storage.write("b.yml", b"")

        assert memory_storage.last_modified("a.yml") == 1000.0
        assert memory_storage.last_modified("b.yml") == 1005.0

    def test_rewrite_updates_timestamp(self, memory_storage, clock):
        """Writing again moves the timestamp forward."""
        memory_storage.write("a.yml", b"")
        clock.advance(5)
        memory_storage.write("a.yml", b"new")
        assert memory_storage.last_modified("a.yml") == 1005.0

    def test_last_modified_missing(self, memory_storage):
        """last_modified() of a missing file raises StorageError."""
        with pytest.raises(StorageError):
            memory_storage.last_modified("missing.yml")

    def test_set_last_modified(self, memory_storage):
        """set_last_modified() overrides the recorded time."""
        memory_storage.write("a.yml", b"data")
        memory_storage.set_last_modified("a.yml", 42.0)
        assert memory_storage.last_modified("a.yml") == 42.0
        assert memory_storage.read("a.yml") == b"data"

    def test_set_last_modified_missing(self, memory_storage):
        """set_last_modified() of a missing file raises StorageError."""
        with pytest.raises(StorageError):
            memory_storage.set_last_modified("missing.yml", 1.0)

    def test_write_creates_parent_directories(self, memory_storage):
        """Parents of written files count as directories."""
        memory_storage.write("cache/nested/a.py", b"")
        assert memory_storage.is_directory("cache")
        assert memory_storage.is_directory("cache/nested")
        assert not memory_storage.is_directory("cache/nested/a.py")

    def test_create_directory(self, memory_storage):
        """create_directory() registers the directory and its parents."""
        memory_storage.create_directory("a/b/")
        assert memory_storage.is_directory("a/b")
        assert memory_storage.is_directory("a")
        assert not memory_storage.exists("a/b")

    def test_default_clock(self):
        """Without a clock the wall time is used."""
        storage = InMemoryStorage()
        storage.write("a.yml", b"")
        assert storage.last_modified("a.yml") > 0

    def test_concurrent_writes(self):
        """Concurrent writers never lose files."""
        storage = InMemoryStorage()

        def _write(index):
            storage.write(f"files/{index}.py", str(index).encode())

        threads = [threading.Thread(target=_write, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(storage.read(f"files/{i}.py") == str(i).encode() for i in range(20))
