"""
Base use case classes.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Optional

from shared.domain import DomainException, Result

InputDTO = TypeVar('InputDTO')
OutputDTO = TypeVar('OutputDTO')


@dataclass
class UseCaseResult(Generic[OutputDTO]):
    """Result wrapper for use cases."""
    success: bool
    data: Optional[OutputDTO] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, data: OutputDTO) -> 'UseCaseResult[OutputDTO]':
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: str = None) -> 'UseCaseResult[OutputDTO]':
        """Create a failed result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def from_error(cls, error: DomainException) -> 'UseCaseResult[OutputDTO]':
        """Create a failed result from a domain error."""
        return cls.fail(error.message, error.code)

    @classmethod
    def from_result(
        cls,
        result: Result,
        mapper: Callable[[object], OutputDTO],
    ) -> 'UseCaseResult[OutputDTO]':
        """Translate a domain ``Result`` into a use case result."""
        if result.is_error:
            return cls.from_error(result.error)
        return cls.ok(mapper(result.value))


class UseCase(ABC, Generic[InputDTO, OutputDTO]):
    """Base use case class."""

    @abstractmethod
    def execute(self, input_dto: InputDTO) -> UseCaseResult[OutputDTO]:
        """Execute the use case."""
        pass
