"""
Result type returned by domain operations.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .exceptions import DomainException

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a success value or a typed domain error."""
    value: Optional[T] = None
    error: Optional[DomainException] = None

    @classmethod
    def ok(cls, value: T = None) -> 'Result[T]':
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def fail(cls, error: DomainException) -> 'Result[T]':
        """Create a failed result."""
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def code(self) -> Optional[str]:
        """Error code of a failed result, ``None`` on success."""
        return self.error.code if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
