"""
Address value object.
"""
from dataclasses import dataclass

from shared.domain import ValueObject


@dataclass(frozen=True)
class Address(ValueObject):
    """Postal address used for shipping or billing."""
    first_name: str
    last_name: str
    address1: str
    city: str
    zipcode: str
    country_code: str
    address2: str = ""
    state_name: str = ""
    phone: str = ""
    company: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def full_address(self) -> str:
        """Get the full address string."""
        parts = [self.address1]
        if self.address2:
            parts.append(self.address2)
        locality = " ".join(p for p in (self.city, self.state_name, self.zipcode) if p)
        parts.append(locality)
        parts.append(self.country_code)
        return ", ".join(parts)
