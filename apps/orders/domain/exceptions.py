"""
Order domain exceptions.

These are returned inside a ``Result`` by the order aggregate and its child
entities; each carries a stable dotted ``code``.
"""
from shared.domain.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    InvalidOperationError,
    ValidationError,
)


# ============================================================
# Generic field validation
# ============================================================

class FieldRequiredError(ValidationError):
    """Raised when a required field is missing or blank."""

    def __init__(self, prefix: str, field: str):
        super().__init__(
            message=f"{field} is required.",
            field=field,
            code=f"{prefix}.{field}.Required",
        )


class FieldTooLongError(ValidationError):
    """Raised when a text field exceeds its maximum length."""

    def __init__(self, prefix: str, field: str, max_length: int):
        super().__init__(
            message=f"{field} must be at most {max_length} characters.",
            field=field,
            code=f"{prefix}.{field}.TooLong",
        )
        self.max_length = max_length


class TooFewItemsError(ValidationError):
    """Raised when a quantity is below its minimum."""

    def __init__(self, field: str = "quantity", minimum: int = 1):
        super().__init__(
            message=f"{field} must be at least {minimum}.",
            field=field,
            code="Order.TooFewItems",
        )
        self.minimum = minimum


class InvalidAmountCentsError(ValidationError):
    """Raised when a monetary amount is out of range."""

    def __init__(self, prefix: str = "Order", minimum: int = 0):
        super().__init__(
            message=f"Amount cents must be at least {minimum}.",
            field="amount_cents",
            code=f"{prefix}.InvalidAmountCents",
        )


# ============================================================
# Order creation and details
# ============================================================

class OrderNotFoundError(EntityNotFoundError):
    """Raised when an order is not found."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Order", entity_id=identifier, code="Order.NotFound")
        self.identifier = identifier


class StoreRequiredError(ValidationError):
    """Raised when an order is created without a store."""

    def __init__(self):
        super().__init__(message="Store is required.", field="store_id", code="Order.StoreRequired")


class InvalidCurrencyError(ValidationError):
    """Raised when a currency is not an ISO 4217 code."""

    def __init__(self, currency: str):
        super().__init__(
            message=f"Invalid currency code: '{currency}'",
            field="currency",
            code="Order.InvalidCurrency",
        )
        self.currency = currency


class InvalidEmailError(ValidationError):
    """Raised when an email is invalid."""

    def __init__(self, email: str):
        super().__init__(message=f"Invalid email format: '{email}'", field="email", code="Order.InvalidEmail")
        self.email = email


class InvalidMetadataError(ValidationError):
    """Raised when a metadata entry is not a string key with a scalar value."""

    def __init__(self, key: object):
        super().__init__(
            message=f"Metadata entry '{key}' must map a non-empty key to a string, number, boolean or null.",
            field="metadata",
            code="Order.InvalidMetadata",
        )
        self.key = key


# ============================================================
# State machine
# ============================================================

class InvalidOrderStateError(InvalidOperationError):
    """Raised when an order operation is invalid for the current state."""

    def __init__(self, operation: str, current_state: str):
        super().__init__(
            message=f"Cannot {operation} order in '{current_state}' state",
            operation=operation,
            state=current_state,
            code="Order.InvalidStateTransition",
        )


class EmptyCartError(InvalidOperationError):
    """Raised when trying to checkout an empty cart."""

    def __init__(self):
        super().__init__(
            message="Cannot checkout an empty cart",
            operation="next",
            state="cart",
            code="Order.EmptyCart",
        )


class AddressRequiredError(ValidationError):
    """Raised when an address is missing or required to proceed."""

    def __init__(self):
        super().__init__(message="Address is required.", field="address", code="Address.Required")


class ShippingMethodRequiredError(ValidationError):
    """Raised when a shipping method is missing or required to proceed."""

    def __init__(self):
        super().__init__(
            message="Shipping method must be set before payment.",
            field="shipping_method",
            code="Order.ShippingMethodRequired",
        )


class InsufficientPaymentError(BusinessRuleViolationError):
    """Raised when payments do not cover the order total."""

    def __init__(self, required_cents: int, covered_cents: int):
        super().__init__(
            message=f"Payments cover {covered_cents} of {required_cents} cents.",
            rule="payments_cover_total",
            code="Order.InsufficientPayment",
        )
        self.required_cents = required_cents
        self.covered_cents = covered_cents


class PaymentNotCompletedError(BusinessRuleViolationError):
    """Raised when an order is completed before its payments are captured."""

    def __init__(self):
        super().__init__(
            message="Payment must be completed before completing the order.",
            rule="payments_completed",
            code="Order.PaymentNotCompleted",
        )


class CannotCancelCompletedError(InvalidOperationError):
    """Raised when cancelling a completed order."""

    def __init__(self):
        super().__init__(
            message="Cannot cancel completed order.",
            operation="cancel",
            state="complete",
            code="Order.CannotCancelCompleted",
        )


class CannotModifyClosedOrderError(InvalidOperationError):
    """Raised when mutating a completed or canceled order."""

    def __init__(self, operation: str, current_state: str):
        super().__init__(
            message=f"Cannot {operation} on a {current_state} order.",
            operation=operation,
            state=current_state,
            code="Order.CannotModifyClosedOrder",
        )


class CannotModifyAfterCartError(InvalidOperationError):
    """Raised when line items change after the order left the cart."""

    def __init__(self, operation: str, current_state: str):
        super().__init__(
            message=f"Cannot {operation} once the order has left the cart (state '{current_state}').",
            operation=operation,
            state=current_state,
            code="Order.CannotModifyAfterCart",
        )


class CannotModifyAddressError(InvalidOperationError):
    """Raised when addresses change outside the checkout-details window."""

    def __init__(self, current_state: str):
        super().__init__(
            message=f"Cannot change addresses in '{current_state}' state.",
            operation="set_address",
            state=current_state,
            code="Order.CannotModifyAddress",
        )


class InvalidStateForShippingError(InvalidOperationError):
    """Raised when a shipping method is selected outside the checkout-details window."""

    def __init__(self, current_state: str):
        super().__init__(
            message=f"Cannot select shipping in '{current_state}' state.",
            operation="set_shipping_method",
            state=current_state,
            code="Order.InvalidStateForShipping",
        )


class InvalidStateForFulfillmentError(InvalidOperationError):
    """Raised when a fulfillment location is chosen outside the checkout-details window."""

    def __init__(self, current_state: str):
        super().__init__(
            message=f"Cannot select a fulfillment location in '{current_state}' state.",
            operation="set_fulfillment_location",
            state=current_state,
            code="Order.InvalidStateForFulfillment",
        )


class InvalidStateForPromotionError(InvalidOperationError):
    """Raised when promotions change after the payment step."""

    def __init__(self, operation: str, current_state: str):
        super().__init__(
            message=f"Cannot {operation} in '{current_state}' state.",
            operation=operation,
            state=current_state,
            code="Order.InvalidStateForPromotion",
        )


class InvalidStateForAdjustmentError(InvalidOperationError):
    """Raised when adjustments change after the payment step."""

    def __init__(self, operation: str, current_state: str):
        super().__init__(
            message=f"Cannot {operation} in '{current_state}' state.",
            operation=operation,
            state=current_state,
            code="Order.InvalidStateForAdjustment",
        )


# ============================================================
# Line items and catalog
# ============================================================

class VariantRequiredError(ValidationError):
    """Raised when no variant is given."""

    def __init__(self):
        super().__init__(message="Variant cannot be null.", field="variant", code="Order.VariantRequired")


class VariantNotPurchasableError(ValidationError):
    """Raised when a variant has no price in the order currency."""

    def __init__(self, variant_id: str, currency: str):
        super().__init__(
            message=f"Variant '{variant_id}' is not available for purchase in {currency}.",
            field="variant",
            code="Order.VariantNotPurchasable",
        )
        self.variant_id = variant_id
        self.currency = currency


class VariantNotFoundError(EntityNotFoundError):
    """Raised when a variant cannot be resolved."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Variant", entity_id=identifier, code="Variant.NotFound")


class LineItemNotFoundError(EntityNotFoundError):
    """Raised when a line item is not part of the order."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Line item", entity_id=identifier, code="Order.LineItemNotFound")


# ============================================================
# Addresses, shipping and fulfillment
# ============================================================

class DigitalOrderNoShippingError(BusinessRuleViolationError):
    """Raised when shipping details are set on a fully digital order."""

    def __init__(self, what: str = "shipping"):
        super().__init__(
            message=f"Digital orders do not require {what}.",
            rule="digital_orders_not_shipped",
            code="Order.DigitalOrderNoShipping",
        )


class DigitalOrderNoFulfillmentError(BusinessRuleViolationError):
    """Raised when a fulfillment location is set on a fully digital order."""

    def __init__(self):
        super().__init__(
            message="Digital orders do not require a fulfillment location.",
            rule="digital_orders_not_fulfilled",
            code="Order.DigitalOrderNoFulfillment",
        )


class FulfillmentLocationRequiredError(ValidationError):
    """Raised when no fulfillment location is given."""

    def __init__(self):
        super().__init__(
            message="Fulfillment location is required.",
            field="fulfillment_location",
            code="Order.FulfillmentLocationRequired",
        )


class ShippingMethodNotFoundError(EntityNotFoundError):
    """Raised when a shipping method cannot be resolved."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Shipping method", entity_id=identifier, code="ShippingMethod.NotFound")


# ============================================================
# Promotions and adjustments
# ============================================================

class PromotionRequiredError(ValidationError):
    """Raised when no promotion is given."""

    def __init__(self):
        super().__init__(message="Promotion is required.", field="promotion", code="Order.PromotionRequired")


class PromotionAlreadyAppliedError(BusinessRuleViolationError):
    """Raised when a second, different promotion is applied."""

    def __init__(self, active_promotion_id: str):
        super().__init__(
            message="Promotion already applied to order.",
            rule="single_promotion",
            code="Order.PromotionAlreadyApplied",
        )
        self.active_promotion_id = active_promotion_id


class InvalidPromotionCodeError(ValidationError):
    """Raised when a coupon code does not match the promotion."""

    def __init__(self, code_value: str = None):
        super().__init__(
            message="Promotion code is invalid.",
            field="promo_code",
            code="Promotion.InvalidCode",
        )
        self.code_value = code_value


class PromotionNotFoundError(EntityNotFoundError):
    """Raised when a promotion cannot be resolved."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Promotion", entity_id=identifier, code="Promotion.NotFound")


class AdjustmentNotFoundError(EntityNotFoundError):
    """Raised when an adjustment is not part of the order."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Adjustment", entity_id=identifier, code="Order.AdjustmentNotFound")


class MandatoryAdjustmentIneligibleError(BusinessRuleViolationError):
    """Raised when a mandatory adjustment would be excluded from totals."""

    def __init__(self):
        super().__init__(
            message="Mandatory adjustments are always eligible.",
            rule="mandatory_adjustment_eligible",
            code="Order.MandatoryAdjustmentIneligible",
        )


# ============================================================
# Payments
# ============================================================

class PaymentNotFoundError(EntityNotFoundError):
    """Raised when a payment is not part of the order."""

    def __init__(self, identifier: str):
        super().__init__(entity_name="Payment", entity_id=identifier, code="Payment.NotFound")


class IdempotencyKeyConflictError(BusinessRuleViolationError):
    """Raised when a payment operation carries a different idempotency key."""

    def __init__(self, stored_key: str, given_key: str):
        super().__init__(
            message="Payment operation with this idempotency key conflicts with the stored key.",
            rule="idempotency_key",
            code="Payment.IdempotencyKeyConflict",
        )
        self.stored_key = stored_key
        self.given_key = given_key


class PaymentInvalidStateTransitionError(InvalidOperationError):
    """Raised when a payment cannot move between two states."""

    def __init__(self, from_state: str, to_state: str):
        super().__init__(
            message=f"Cannot transition from {from_state} to {to_state}.",
            operation=to_state,
            state=from_state,
            code="Payment.InvalidStateTransition",
        )


class AuthorizationRequiredError(InvalidOperationError):
    """Raised when capturing a payment that was never authorized."""

    def __init__(self, current_state: str):
        super().__init__(
            message="Payment must be authorized before capture.",
            operation="capture",
            state=current_state,
            code="Payment.AuthorizationRequired",
        )


class CannotVoidCapturedError(InvalidOperationError):
    """Raised when voiding a captured payment."""

    def __init__(self, current_state: str):
        super().__init__(
            message="Cannot void captured or completed payment.",
            operation="void",
            state=current_state,
            code="Payment.CannotVoidCaptured",
        )


class CannotRefundNonCompletedError(InvalidOperationError):
    """Raised when refunding a payment that holds no captured funds."""

    def __init__(self, current_state: str):
        super().__init__(
            message="Can only refund completed payments.",
            operation="refund",
            state=current_state,
            code="Payment.CannotRefundNonCompleted",
        )


class PartialRefundExceedsAmountError(BusinessRuleViolationError):
    """Raised when a refund exceeds what is still refundable."""

    def __init__(self, requested_cents: int, available_cents: int):
        super().__init__(
            message=f"Requested refund of {requested_cents} cents exceeds available {available_cents} cents.",
            rule="refund_within_amount",
            code="Payment.PartialRefundExceedsAmount",
        )
        self.requested_cents = requested_cents
        self.available_cents = available_cents
