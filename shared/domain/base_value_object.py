"""
Base value object class for DDD.
"""
from abc import ABC
from dataclasses import dataclass, fields, replace
from typing import Any, Tuple


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base value object class.
    Value objects are immutable and compared by their attributes.
    """

    def _values(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self._values() == other._values()

    def __hash__(self) -> int:
        return hash(self._values())

    def with_changes(self, **changes: Any) -> 'ValueObject':
        """Return a copy with the given attributes replaced."""
        return replace(self, **changes)
