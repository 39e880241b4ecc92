"""
Shipment entity.
"""
import random
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from uuid import UUID

from shared.domain import BaseEntity


class ShipmentState(str, Enum):
    PENDING = 'pending'
    CANCELED = 'canceled'


def _generate_shipment_number() -> str:
    return "H" + ''.join(random.choices(string.digits, k=11))


@dataclass(eq=False, kw_only=True)
class Shipment(BaseEntity):
    """Pending shipment record for the physical part of an order."""
    order_id: UUID
    shipping_method_id: Optional[UUID] = None
    stock_location_id: Optional[UUID] = None
    number: str = field(default_factory=_generate_shipment_number)
    state: ShipmentState = ShipmentState.PENDING

    @classmethod
    def create(
        cls,
        order_id: UUID,
        shipping_method_id: Optional[UUID],
        stock_location_id: Optional[UUID] = None,
    ) -> 'Shipment':
        return cls(
            order_id=order_id,
            shipping_method_id=shipping_method_id,
            stock_location_id=stock_location_id,
        )

    def cancel(self) -> None:
        """Cancel the shipment; repeated calls are no-ops."""
        if self.state == ShipmentState.CANCELED:
            return
        self.state = ShipmentState.CANCELED
        self.touch()

    @property
    def is_canceled(self) -> bool:
        return self.state == ShipmentState.CANCELED
