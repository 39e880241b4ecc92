"""
Domain exceptions.

Domain operations do not raise these for ordinary rule violations; they return
them inside a ``Result``. ``Result.unwrap()`` raises them at a boundary that
prefers exceptions.
"""
from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer."""

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_name: str, entity_id: str, code: str = None):
        super().__init__(
            message=f"{entity_name} with id '{entity_id}' not found",
            code=code or "ENTITY_NOT_FOUND"
        )
        self.entity_name = entity_name
        self.entity_id = entity_id


class ValidationError(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: str = None, code: str = None):
        super().__init__(message=message, code=code or "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolationError(DomainException):
    """Raised when a business rule is violated."""

    def __init__(self, message: str, rule: str = None, code: str = None):
        super().__init__(message=message, code=code or "BUSINESS_RULE_VIOLATION")
        self.rule = rule


class InsufficientStockError(DomainException):
    """Raised when stock is insufficient."""

    def __init__(self, variant_id: str, requested: int, available: int, code: str = None):
        super().__init__(
            message=f"Insufficient stock for variant '{variant_id}': requested {requested}, available {available}",
            code=code or "INSUFFICIENT_STOCK"
        )
        self.variant_id = variant_id
        self.requested = requested
        self.available = available


class InvalidOperationError(DomainException):
    """Raised when an operation is invalid for the current state."""

    def __init__(self, message: str, operation: str = None, state: str = None, code: str = None):
        super().__init__(message=message, code=code or "INVALID_OPERATION")
        self.operation = operation
        self.state = state


class InvariantViolationError(DomainException):
    """Reported by diagnostic checks when an aggregate is internally inconsistent."""

    def __init__(self, message: str, code: str = None, expected: Optional[int] = None, actual: Optional[int] = None):
        super().__init__(message=message, code=code or "INVARIANT_VIOLATION")
        self.expected = expected
        self.actual = actual


class ConcurrencyConflictError(DomainException):
    """Raised by a repository when a concurrent writer already committed."""

    def __init__(self, entity_name: str, entity_id: str, expected_version: int):
        super().__init__(
            message=(
                f"{entity_name} '{entity_id}' was modified concurrently "
                f"(expected version {expected_version})"
            ),
            code="CONCURRENCY_CONFLICT"
        )
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.expected_version = expected_version
