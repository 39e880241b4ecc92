# Shared domain module
from .base_entity import BaseEntity, AggregateRoot, EventOutbox, utcnow
from .base_value_object import ValueObject
from .domain_event import DomainEvent
from .exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
    BusinessRuleViolationError,
    InsufficientStockError,
    InvalidOperationError,
    InvariantViolationError,
    ConcurrencyConflictError,
)
from .result import Result

__all__ = [
    'BaseEntity',
    'AggregateRoot',
    'EventOutbox',
    'utcnow',
    'ValueObject',
    'DomainEvent',
    'DomainException',
    'EntityNotFoundError',
    'ValidationError',
    'BusinessRuleViolationError',
    'InsufficientStockError',
    'InvalidOperationError',
    'InvariantViolationError',
    'ConcurrencyConflictError',
    'Result',
]
