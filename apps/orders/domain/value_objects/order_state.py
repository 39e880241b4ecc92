"""
Order state value object.
"""
from enum import Enum


class OrderState(str, Enum):
    """Lifecycle states of an order, in checkout order."""
    CART = 'cart'
    ADDRESS = 'address'
    DELIVERY = 'delivery'
    PAYMENT = 'payment'
    CONFIRM = 'confirm'
    COMPLETE = 'complete'
    CANCELED = 'canceled'

    @property
    def is_terminal(self) -> bool:
        return self in (OrderState.COMPLETE, OrderState.CANCELED)


# States in which checkout details (addresses, shipping) may still change.
CHECKOUT_DETAILS_WINDOW = frozenset({
    OrderState.CART,
    OrderState.ADDRESS,
    OrderState.DELIVERY,
})

# States in which money-affecting adjustments may still change.
ADJUSTMENT_WINDOW = CHECKOUT_DETAILS_WINDOW | {OrderState.PAYMENT}
