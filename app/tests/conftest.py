"""Shared fixtures for langcache tests."""

import pytest

from langcache.storage import InMemoryStorage, LocalFileStorage


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def memory_storage(clock):
    """InMemoryStorage stamping writes with the manual clock."""
    return InMemoryStorage(clock=clock)


@pytest.fixture
def local_storage():
    return LocalFileStorage()
