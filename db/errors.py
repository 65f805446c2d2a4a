"""
Storage error types.

`StorageFailure` wraps whatever the engine raised. `StorageResult` carries
either a value or a failure between the session code and the repository's
public methods, which turn failures into empty/default results.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StorageFailure(Exception):
    """Raised when a transaction cannot be opened, read or committed."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


@dataclass
class StorageResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[StorageFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        if not self.ok or self.value is None:
            return default
        return self.value
