"""Result values for calls that report refusal instead of raising."""

from dataclasses import dataclass
from typing import Any, Optional

from langcache.operations.status import OperationStatus


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a setter call on an I18n object.

    Attributes:
        status: Whether the call was applied.
        message: Readable description, suitable for logs.
        data: The applied change on success, e.g. ``{"prefix": "T"}``.
        error_code: Machine-readable reason on refusal, e.g.
            ``"already_initialized"``.
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status is OperationStatus.SUCCESS

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Build a refusal that repeating the call cannot change.

        Example:
            >>> OperationResult.permanent_error(
            ...     "already initialized", error_code="already_initialized"
            ... ).is_success
            False
        """
        return cls(
            status=OperationStatus.PERMANENT_ERROR,
            message=message,
            data=data,
            error_code=error_code,
        )
