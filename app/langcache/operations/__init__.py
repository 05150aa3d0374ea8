"""Operation result types and status enums.

Uniform result values returned by calls that report failure instead of
raising, such as the I18n setters once the object is frozen.
"""

from langcache.operations.result import OperationResult
from langcache.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
