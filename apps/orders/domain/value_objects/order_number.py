"""
Order number value object.
"""
import random
import string
from dataclasses import dataclass
from datetime import datetime, timezone

from shared.domain import ValueObject


@dataclass(frozen=True)
class OrderNumber(ValueObject):
    """Human-readable order number, e.g. ``R20261017482913``."""
    value: str

    @classmethod
    def generate(cls) -> 'OrderNumber':
        """Generate a new order number."""
        date_part = datetime.now(timezone.utc).strftime("%Y%m%d")
        random_part = ''.join(random.choices(string.digits, k=6))
        return cls(value=f"R{date_part}{random_part}")

    def __str__(self) -> str:
        return self.value
