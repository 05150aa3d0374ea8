"""Status values of OperationResult."""

from enum import Enum


class OperationStatus(Enum):
    """Whether a call was applied.

    PERMANENT_ERROR means the call was refused and will be refused again,
    as with a setter on an initialized I18n object.
    """

    SUCCESS = "success"
    PERMANENT_ERROR = "permanent_error"
