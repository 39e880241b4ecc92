"""
Order entity (Aggregate Root).

The order owns the checkout state machine, its line items, adjustments,
payments and shipments. Every mutator returns a ``Result``; money-affecting
mutators recalculate totals before returning.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional
from uuid import UUID

from shared.domain import AggregateRoot, DomainEvent, InvariantViolationError, Result, utcnow
from ..collaborators import Promotion, ShippingMethod, Variant
from ..constraints import (
    AMOUNT_CENTS_MIN_VALUE,
    CURRENCY_CODE_LENGTH,
    EMAIL_MAX_LENGTH,
    PROMO_CODE_MAX_LENGTH,
    QUANTITY_MIN_VALUE,
    SPECIAL_INSTRUCTIONS_MAX_LENGTH,
)
from ..events import (
    BillingAddressSet,
    FinalizeInventory,
    FulfillmentLocationSelected,
    InventoryLine,
    LineItemAdded,
    LineItemQuantityChanged,
    LineItemRemoved,
    OrderCanceled,
    OrderCompleted,
    OrderCreated,
    OrderStateChanged,
    PromotionApplied,
    PromotionRemoved,
    PromotionUsed,
    ReleaseInventory,
    ReserveInventory,
    ShippingAddressSet,
    ShippingMethodSelected,
)
from ..exceptions import (
    AddressRequiredError,
    AdjustmentNotFoundError,
    CannotCancelCompletedError,
    CannotModifyAddressError,
    CannotModifyAfterCartError,
    CannotModifyClosedOrderError,
    DigitalOrderNoFulfillmentError,
    DigitalOrderNoShippingError,
    EmptyCartError,
    FieldTooLongError,
    FulfillmentLocationRequiredError,
    InsufficientPaymentError,
    InvalidAmountCentsError,
    InvalidCurrencyError,
    InvalidEmailError,
    InvalidMetadataError,
    InvalidOrderStateError,
    InvalidPromotionCodeError,
    InvalidStateForAdjustmentError,
    InvalidStateForFulfillmentError,
    InvalidStateForPromotionError,
    InvalidStateForShippingError,
    LineItemNotFoundError,
    PaymentNotCompletedError,
    PromotionAlreadyAppliedError,
    PromotionRequiredError,
    ShippingMethodRequiredError,
    StoreRequiredError,
)
from ..value_objects import (
    ADJUSTMENT_WINDOW,
    CHECKOUT_DETAILS_WINDOW,
    Address,
    Metadata,
    MetadataValue,
    OrderNumber,
    OrderState,
    is_metadata_key,
    is_metadata_value,
)
from .adjustment import AdjustmentScope, LineItemAdjustment, OrderAdjustment
from .line_item import LineItem
from .payment import Payment
from .shipment import Shipment

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


@dataclass(eq=False, kw_only=True)
class Order(AggregateRoot):
    """Order entity representing a customer order from cart to completion."""
    store_id: UUID
    currency: str
    number: OrderNumber = field(default_factory=OrderNumber.generate)
    state: OrderState = OrderState.CART
    user_id: Optional[UUID] = None
    email: Optional[str] = None

    item_total_cents: int = 0
    shipment_total_cents: int = 0
    adjustment_total_cents: int = 0
    total_cents: int = 0

    promotion_id: Optional[UUID] = None
    promo_code: Optional[str] = None

    ship_address: Optional[Address] = None
    bill_address: Optional[Address] = None
    shipping_method_id: Optional[UUID] = None
    fulfillment_location_id: Optional[UUID] = None
    special_instructions: Optional[str] = None

    completed_at: Optional[datetime] = None
    canceled_at: Optional[datetime] = None

    public_metadata: Metadata = field(default_factory=dict)
    private_metadata: Metadata = field(default_factory=dict)

    line_items: List[LineItem] = field(default_factory=list)
    adjustments: List[OrderAdjustment] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)
    shipments: List[Shipment] = field(default_factory=list)

    version: int = 0

    # ==================================================================
    # Creation
    # ==================================================================

    @classmethod
    def create(
        cls,
        store_id: UUID,
        currency: str,
        user_id: Optional[UUID] = None,
        email: Optional[str] = None,
    ) -> Result['Order']:
        """Factory method to create a new order in the cart state."""
        if store_id is None:
            return Result.fail(StoreRequiredError())
        normalized = (currency or "").strip().upper()
        if len(normalized) != CURRENCY_CODE_LENGTH or not normalized.isalpha():
            return Result.fail(InvalidCurrencyError(currency))

        order = cls(store_id=store_id, currency=normalized, user_id=user_id)
        if email is not None:
            result = order.set_email(email)
            if result.is_error:
                return result

        order.add_domain_event(
            OrderCreated(
                order_id=order.id,
                store_id=store_id,
                order_number=str(order.number),
            )
        )
        return Result.ok(order)

    # ==================================================================
    # State machine
    # ==================================================================

    def next(self) -> Result['Order']:
        """Advance the order one step through checkout."""
        if self.state.is_terminal:
            return Result.fail(InvalidOrderStateError("next", self.state.value))

        transitions: Dict[OrderState, Callable[[], Result['Order']]] = {
            OrderState.CART: self._to_address,
            OrderState.ADDRESS: self._to_delivery,
            OrderState.DELIVERY: self._to_payment,
            OrderState.PAYMENT: self._to_confirm,
            OrderState.CONFIRM: self._to_complete,
        }
        return transitions[self.state]()

    def _to_address(self) -> Result['Order']:
        if not self.line_items:
            return Result.fail(EmptyCartError())
        self._change_state(OrderState.ADDRESS)
        return Result.ok(self)

    def _to_delivery(self) -> Result['Order']:
        if not self.is_fully_digital:
            if self.ship_address is None or self.bill_address is None:
                return Result.fail(AddressRequiredError())
        self._change_state(OrderState.DELIVERY)
        return Result.ok(self)

    def _to_payment(self) -> Result['Order']:
        if not self.is_fully_digital:
            if self.shipping_method_id is None:
                return Result.fail(ShippingMethodRequiredError())
            if not any(not s.is_canceled for s in self.shipments):
                self.shipments.append(
                    Shipment.create(
                        order_id=self.id,
                        shipping_method_id=self.shipping_method_id,
                        stock_location_id=self.fulfillment_location_id,
                    )
                )
            self.add_domain_event(
                ReserveInventory(
                    order_id=self.id,
                    store_id=self.store_id,
                    stock_location_id=self.fulfillment_location_id,
                    lines=self._physical_inventory_lines(),
                )
            )
        self._change_state(OrderState.PAYMENT)
        return Result.ok(self)

    def _to_confirm(self) -> Result['Order']:
        covered = self.counted_payment_total_cents
        if covered < self.total_cents:
            return Result.fail(InsufficientPaymentError(self.total_cents, covered))
        self._change_state(OrderState.CONFIRM)
        return Result.ok(self)

    def _to_complete(self) -> Result['Order']:
        covered = self.counted_payment_total_cents
        if covered < self.total_cents:
            return Result.fail(InsufficientPaymentError(self.total_cents, covered))
        if any(not p.is_completed for p in self.payments if p.counts_toward_total):
            return Result.fail(PaymentNotCompletedError())

        self.completed_at = utcnow()
        self._change_state(OrderState.COMPLETE)
        self.add_domain_event(
            OrderCompleted(order_id=self.id, store_id=self.store_id, total_cents=self.total_cents)
        )
        self.add_domain_event(
            FinalizeInventory(
                order_id=self.id,
                store_id=self.store_id,
                stock_location_id=self.fulfillment_location_id,
                lines=self._physical_inventory_lines(),
            )
        )
        if self.promotion_id is not None:
            self.add_domain_event(PromotionUsed(order_id=self.id, promotion_id=self.promotion_id))
        return Result.ok(self)

    def cancel(self) -> Result['Order']:
        """Cancel the order; canceling a canceled order is a no-op."""
        if self.state == OrderState.CANCELED:
            return Result.ok(self)
        if self.state == OrderState.COMPLETE:
            return Result.fail(CannotCancelCompletedError())

        self.canceled_at = utcnow()
        for shipment in self.shipments:
            shipment.cancel()
        self._change_state(OrderState.CANCELED)
        self.add_domain_event(OrderCanceled(order_id=self.id, store_id=self.store_id))
        self.add_domain_event(
            ReleaseInventory(
                order_id=self.id,
                store_id=self.store_id,
                stock_location_id=self.fulfillment_location_id,
                lines=self._physical_inventory_lines(),
            )
        )
        return Result.ok(self)

    def _change_state(self, new_state: OrderState) -> None:
        """Change order state and emit event."""
        old_state = self.state
        self.state = new_state
        self.touch()
        self.add_domain_event(
            OrderStateChanged(
                order_id=self.id,
                old_state=old_state.value,
                new_state=new_state.value,
            )
        )

    def _physical_inventory_lines(self):
        return tuple(
            InventoryLine(variant_id=line.variant_id, quantity=line.quantity)
            for line in self.line_items
            if not line.is_digital
        )

    # ==================================================================
    # Line items
    # ==================================================================

    def add_line_item(self, variant: Optional[Variant], quantity: int) -> Result[LineItem]:
        """Add a variant to the cart, merging with an existing line for it."""
        guard = self._guard_cart("add_line_item")
        if guard:
            return guard
        # Validates variant, quantity and price in one place.
        candidate = LineItem.create(self.id, variant, quantity, self.currency)
        if candidate.is_error:
            return candidate

        existing = self._line_for_variant(variant.id)
        if existing is not None:
            old_quantity = existing.quantity
            existing.update_quantity(old_quantity + quantity)
            self.recalculate_totals()
            self.add_domain_event(
                LineItemQuantityChanged(
                    order_id=self.id,
                    line_item_id=existing.id,
                    old_quantity=old_quantity,
                    new_quantity=existing.quantity,
                )
            )
            return Result.ok(existing)

        line = candidate.value
        self.line_items.append(line)
        self.recalculate_totals()
        self.add_domain_event(
            LineItemAdded(
                order_id=self.id,
                line_item_id=line.id,
                variant_id=line.variant_id,
                quantity=line.quantity,
            )
        )
        return Result.ok(line)

    def remove_line_item(self, line_item_id: UUID) -> Result['Order']:
        guard = self._guard_cart("remove_line_item")
        if guard:
            return guard
        line = self.find_line_item(line_item_id)
        if line is None:
            return Result.fail(LineItemNotFoundError(str(line_item_id)))

        self.line_items.remove(line)
        self.recalculate_totals()
        self.add_domain_event(
            LineItemRemoved(order_id=self.id, line_item_id=line.id, variant_id=line.variant_id)
        )
        return Result.ok(self)

    def update_line_item_quantity(self, line_item_id: UUID, quantity: int) -> Result['Order']:
        guard = self._guard_cart("update_line_item_quantity")
        if guard:
            return guard
        line = self.find_line_item(line_item_id)
        if line is None:
            return Result.fail(LineItemNotFoundError(str(line_item_id)))

        old_quantity = line.quantity
        result = line.update_quantity(quantity)
        if result.is_error:
            return Result.fail(result.error)
        self.recalculate_totals()
        self.add_domain_event(
            LineItemQuantityChanged(
                order_id=self.id,
                line_item_id=line.id,
                old_quantity=old_quantity,
                new_quantity=quantity,
            )
        )
        return Result.ok(self)

    def _guard_cart(self, operation: str) -> Optional[Result]:
        closed = self._guard_open(operation)
        if closed:
            return closed
        if self.state != OrderState.CART:
            return Result.fail(CannotModifyAfterCartError(operation, self.state.value))
        return None

    def _guard_open(self, operation: str) -> Optional[Result]:
        if self.state.is_terminal:
            return Result.fail(CannotModifyClosedOrderError(operation, self.state.value))
        return None

    def _line_for_variant(self, variant_id: UUID) -> Optional[LineItem]:
        for line in self.line_items:
            if line.variant_id == variant_id:
                return line
        return None

    def find_line_item(self, line_item_id: UUID) -> Optional[LineItem]:
        for line in self.line_items:
            if line.id == line_item_id:
                return line
        return None

    # ==================================================================
    # Totals
    # ==================================================================

    def recalculate_totals(self) -> None:
        """Recompute every derived total from line items, adjustments and shipping."""
        if self.is_fully_digital:
            self.shipping_method_id = None
            self.shipment_total_cents = 0

        self.item_total_cents = sum(line.total_cents for line in self.line_items)
        self.adjustment_total_cents = sum(a.counted_amount_cents for a in self.adjustments)
        self.total_cents = self.item_total_cents + self.shipment_total_cents + self.adjustment_total_cents
        self.touch()

    @property
    def is_fully_digital(self) -> bool:
        """True when the order has line items and every one of them is digital."""
        return bool(self.line_items) and all(line.is_digital for line in self.line_items)

    @property
    def item_count(self) -> int:
        """Get the total number of items."""
        return sum(line.quantity for line in self.line_items)

    @property
    def promotion_total_cents(self) -> int:
        """Eligible discount produced by the active promotion (negative or zero)."""
        if self.promotion_id is None:
            return 0
        total = sum(
            a.counted_amount_cents for a in self.adjustments if a.promotion_id == self.promotion_id
        )
        for line in self.line_items:
            total += sum(
                a.counted_amount_cents for a in line.adjustments if a.promotion_id == self.promotion_id
            )
        return total

    @property
    def counted_payment_total_cents(self) -> int:
        """Sum of payments that still fund the order (not void, not failed)."""
        return sum(p.amount_cents for p in self.payments if p.counts_toward_total)

    @property
    def completed_payment_total_cents(self) -> int:
        return sum(p.amount_cents for p in self.payments if p.is_completed)

    # ==================================================================
    # Promotions and adjustments
    # ==================================================================

    def apply_promotion(self, promotion: Optional[Promotion], code: Optional[str] = None) -> Result['Order']:
        """
        Apply a promotion and attach the adjustments it produces.

        Only one promotion can be active. Applying the active promotion again
        replaces its adjustments with freshly calculated ones.
        """
        if promotion is None:
            return Result.fail(PromotionRequiredError())
        closed = self._guard_open("apply_promotion")
        if closed:
            return closed
        if self.state not in ADJUSTMENT_WINDOW:
            return Result.fail(InvalidStateForPromotionError("apply_promotion", self.state.value))
        if self.promotion_id is not None and self.promotion_id != promotion.id:
            return Result.fail(PromotionAlreadyAppliedError(str(self.promotion_id)))

        normalized_code = _normalize_code(code)
        if normalized_code is not None and len(normalized_code) > PROMO_CODE_MAX_LENGTH:
            return Result.fail(FieldTooLongError("Order", "PromoCode", PROMO_CODE_MAX_LENGTH))
        if promotion.requires_coupon_code:
            expected = _normalize_code(promotion.promotion_code)
            if normalized_code is None or normalized_code != expected:
                return Result.fail(InvalidPromotionCodeError(code))

        calculated = promotion.calculate(self)
        if calculated.is_error:
            return Result.fail(calculated.error)
        descriptors = calculated.value or []
        for descriptor in descriptors:
            if descriptor.is_line_item_scoped and self.find_line_item(descriptor.line_item_id) is None:
                return Result.fail(LineItemNotFoundError(str(descriptor.line_item_id)))

        # Build every adjustment before touching state so a bad descriptor leaves the order intact.
        order_adjustments = []
        line_adjustments = []
        for descriptor in descriptors:
            if descriptor.is_line_item_scoped:
                created = LineItemAdjustment.create(
                    line_item_id=descriptor.line_item_id,
                    amount_cents=descriptor.amount_cents,
                    description=descriptor.description,
                    promotion_id=promotion.id,
                )
                target = line_adjustments
            else:
                created = OrderAdjustment.create(
                    order_id=self.id,
                    amount_cents=descriptor.amount_cents,
                    description=descriptor.description,
                    promotion_id=promotion.id,
                )
                target = order_adjustments
            if created.is_error:
                return Result.fail(created.error)
            target.append(created.value)

        self._strip_promotion_adjustments(promotion.id)
        self.adjustments.extend(order_adjustments)
        for adjustment in line_adjustments:
            self.find_line_item(adjustment.line_item_id).adjustments.append(adjustment)

        self.promotion_id = promotion.id
        self.promo_code = normalized_code or _normalize_code(promotion.promotion_code)
        self.recalculate_totals()
        self.add_domain_event(
            PromotionApplied(
                order_id=self.id,
                promotion_id=promotion.id,
                promo_code=self.promo_code,
                discount_cents=self.promotion_total_cents,
            )
        )
        return Result.ok(self)

    def remove_promotion(self) -> Result['Order']:
        """Strip the active promotion's adjustments and restore the unpromoted totals."""
        if self.promotion_id is None:
            return Result.ok(self)
        closed = self._guard_open("remove_promotion")
        if closed:
            return closed
        if self.state not in ADJUSTMENT_WINDOW:
            return Result.fail(InvalidStateForPromotionError("remove_promotion", self.state.value))

        promotion_id = self.promotion_id
        self._strip_promotion_adjustments(promotion_id)
        self.promotion_id = None
        self.promo_code = None
        self.recalculate_totals()
        self.add_domain_event(PromotionRemoved(order_id=self.id, promotion_id=promotion_id))
        return Result.ok(self)

    def _strip_promotion_adjustments(self, promotion_id: UUID) -> None:
        self.adjustments = [a for a in self.adjustments if a.promotion_id != promotion_id]
        for line in self.line_items:
            line.remove_promotion_adjustments(promotion_id)

    def add_adjustment(
        self,
        amount_cents: int,
        description: str,
        scope: AdjustmentScope = AdjustmentScope.ORDER,
        line_item_id: Optional[UUID] = None,
        mandatory: bool = False,
        eligible: bool = True,
    ) -> Result:
        """Add a manual fee, tax or credit to the order or to one line item."""
        guard = self._guard_adjustment_window("add_adjustment")
        if guard:
            return guard

        if line_item_id is not None:
            line = self.find_line_item(line_item_id)
            if line is None:
                return Result.fail(LineItemNotFoundError(str(line_item_id)))
            created = LineItemAdjustment.create(
                line_item_id=line.id,
                amount_cents=amount_cents,
                description=description,
                eligible=eligible,
            )
            if created.is_error:
                return created
            line.adjustments.append(created.value)
        else:
            created = OrderAdjustment.create(
                order_id=self.id,
                amount_cents=amount_cents,
                description=description,
                scope=scope,
                eligible=eligible,
                mandatory=mandatory,
            )
            if created.is_error:
                return created
            self.adjustments.append(created.value)

        self.recalculate_totals()
        return created

    def set_adjustment_eligibility(self, adjustment_id: UUID, eligible: bool) -> Result['Order']:
        guard = self._guard_adjustment_window("set_adjustment_eligibility")
        if guard:
            return guard

        adjustment = self.find_adjustment(adjustment_id)
        if adjustment is None:
            return Result.fail(AdjustmentNotFoundError(str(adjustment_id)))
        result = adjustment.set_eligibility(eligible)
        if result.is_error:
            return Result.fail(result.error)
        self.recalculate_totals()
        return Result.ok(self)

    def find_adjustment(self, adjustment_id: UUID):
        """Look up an order- or line-item-level adjustment by id."""
        for adjustment in self.adjustments:
            if adjustment.id == adjustment_id:
                return adjustment
        for line in self.line_items:
            for adjustment in line.adjustments:
                if adjustment.id == adjustment_id:
                    return adjustment
        return None

    def _guard_adjustment_window(self, operation: str) -> Optional[Result]:
        closed = self._guard_open(operation)
        if closed:
            return closed
        if self.state not in ADJUSTMENT_WINDOW:
            return Result.fail(InvalidStateForAdjustmentError(operation, self.state.value))
        return None

    # ==================================================================
    # Addresses, shipping and checkout details
    # ==================================================================

    def set_shipping_address(self, address: Optional[Address]) -> Result['Order']:
        if address is None:
            return Result.fail(AddressRequiredError())
        guard = self._guard_checkout_details("set_shipping_address")
        if guard:
            return guard
        if self.is_fully_digital:
            return Result.fail(DigitalOrderNoShippingError("shipping address"))

        self.ship_address = address
        self.touch()
        self.add_domain_event(ShippingAddressSet(order_id=self.id))
        return Result.ok(self)

    def set_billing_address(self, address: Optional[Address]) -> Result['Order']:
        if address is None:
            return Result.fail(AddressRequiredError())
        guard = self._guard_checkout_details("set_billing_address")
        if guard:
            return guard

        self.bill_address = address
        self.touch()
        self.add_domain_event(BillingAddressSet(order_id=self.id))
        return Result.ok(self)

    def _guard_checkout_details(self, operation: str) -> Optional[Result]:
        closed = self._guard_open(operation)
        if closed:
            return closed
        if self.state not in CHECKOUT_DETAILS_WINDOW:
            return Result.fail(CannotModifyAddressError(self.state.value))
        return None

    def set_shipping_method(self, shipping_method: Optional[ShippingMethod]) -> Result['Order']:
        """Select a shipping method and charge its base cost as the shipment total."""
        if shipping_method is None:
            return Result.fail(ShippingMethodRequiredError())
        closed = self._guard_open("set_shipping_method")
        if closed:
            return closed
        if self.is_fully_digital:
            return Result.fail(DigitalOrderNoShippingError("shipping method"))
        if self.state not in CHECKOUT_DETAILS_WINDOW:
            return Result.fail(InvalidStateForShippingError(self.state.value))
        if shipping_method.base_cost_cents is None or shipping_method.base_cost_cents < AMOUNT_CENTS_MIN_VALUE:
            return Result.fail(InvalidAmountCentsError("ShippingMethod", AMOUNT_CENTS_MIN_VALUE))

        self.shipping_method_id = shipping_method.id
        self.shipment_total_cents = shipping_method.base_cost_cents
        self.recalculate_totals()
        self.add_domain_event(
            ShippingMethodSelected(
                order_id=self.id,
                shipping_method_id=shipping_method.id,
                shipment_total_cents=self.shipment_total_cents,
            )
        )
        return Result.ok(self)

    def set_fulfillment_location(self, stock_location_id: Optional[UUID]) -> Result['Order']:
        """Choose the stock location that will fulfil the physical lines."""
        if stock_location_id is None:
            return Result.fail(FulfillmentLocationRequiredError())
        closed = self._guard_open("set_fulfillment_location")
        if closed:
            return closed
        if self.is_fully_digital:
            return Result.fail(DigitalOrderNoFulfillmentError())
        if self.state not in CHECKOUT_DETAILS_WINDOW:
            return Result.fail(InvalidStateForFulfillmentError(self.state.value))

        self.fulfillment_location_id = stock_location_id
        self.touch()
        self.add_domain_event(
            FulfillmentLocationSelected(
                order_id=self.id,
                store_id=self.store_id,
                stock_location_id=stock_location_id,
            )
        )
        return Result.ok(self)

    def set_special_instructions(self, instructions: Optional[str]) -> Result['Order']:
        closed = self._guard_open("set_special_instructions")
        if closed:
            return closed
        if instructions is not None and len(instructions) > SPECIAL_INSTRUCTIONS_MAX_LENGTH:
            return Result.fail(
                FieldTooLongError("Order", "SpecialInstructions", SPECIAL_INSTRUCTIONS_MAX_LENGTH)
            )
        self.special_instructions = instructions.strip() if instructions else None
        self.touch()
        return Result.ok(self)

    def set_email(self, email: Optional[str]) -> Result['Order']:
        closed = self._guard_open("set_email")
        if closed:
            return closed
        if email is None or not email.strip():
            self.email = None
            self.touch()
            return Result.ok(self)
        normalized = email.strip().lower()
        if len(normalized) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(normalized):
            return Result.fail(InvalidEmailError(email))
        self.email = normalized
        self.touch()
        return Result.ok(self)

    def set_metadata(self, key: str, value: MetadataValue, private: bool = False) -> Result['Order']:
        """Set one public or private metadata entry."""
        closed = self._guard_open("set_metadata")
        if closed:
            return closed
        if not is_metadata_key(key) or not is_metadata_value(value):
            return Result.fail(InvalidMetadataError(key))
        target = self.private_metadata if private else self.public_metadata
        target[key.strip()] = value
        self.touch()
        return Result.ok(self)

    # ==================================================================
    # Payments
    # ==================================================================

    def add_payment(
        self,
        amount_cents: int,
        payment_method_id: Optional[UUID],
        payment_method_type: str,
        idempotency_key: Optional[str] = None,
    ) -> Result[Payment]:
        """
        Attach a pending payment without changing the order state.

        A retried call whose idempotency key was already used on this order
        returns the payment created by the first call.
        """
        closed = self._guard_open("add_payment")
        if closed:
            return closed
        if amount_cents is None or amount_cents < AMOUNT_CENTS_MIN_VALUE:
            return Result.fail(InvalidAmountCentsError("Order", AMOUNT_CENTS_MIN_VALUE))
        if idempotency_key:
            for payment in self.payments:
                if payment.idempotency_key == idempotency_key:
                    return Result.ok(payment)

        created = Payment.create(
            order_id=self.id,
            amount_cents=amount_cents,
            currency=self.currency,
            payment_method_id=payment_method_id,
            payment_method_type=payment_method_type,
            idempotency_key=idempotency_key,
        )
        if created.is_error:
            return created
        self.payments.append(created.value)
        self.touch()
        return created

    def find_payment(self, payment_id: UUID) -> Optional[Payment]:
        for payment in self.payments:
            if payment.id == payment_id:
                return payment
        return None

    # ==================================================================
    # Events
    # ==================================================================

    @property
    def domain_events(self) -> List[DomainEvent]:
        """Pending events of the order followed by those of its payments."""
        events = super().domain_events
        for payment in self.payments:
            events.extend(payment.domain_events)
        return events

    def clear_domain_events(self) -> List[DomainEvent]:
        events = super().clear_domain_events()
        for payment in self.payments:
            events.extend(payment.clear_domain_events())
        return events

    # ==================================================================
    # Invariants
    # ==================================================================

    def validate_invariants(self) -> Result['Order']:
        """Return the first internal inconsistency found, or success."""
        violations = self.invariant_violations()
        if violations:
            return Result.fail(violations[0])
        return Result.ok(self)

    def invariant_violations(self) -> List[InvariantViolationError]:
        """Re-derive every total and check every structural rule independently."""
        violations = []

        for line in self.line_items:
            if line.quantity < QUANTITY_MIN_VALUE:
                violations.append(InvariantViolationError(
                    f"Line item '{line.id}' has quantity {line.quantity}",
                    code="Order.InvalidLineItemQuantity",
                    expected=QUANTITY_MIN_VALUE,
                    actual=line.quantity,
                ))

        expected_items = sum(
            line.unit_price_cents * line.quantity
            + sum(a.amount_cents for a in line.adjustments if a.eligible)
            for line in self.line_items
        )
        if self.item_total_cents != expected_items:
            violations.append(InvariantViolationError(
                "Item total does not match line items",
                code="Order.InconsistentItemTotal",
                expected=expected_items,
                actual=self.item_total_cents,
            ))

        expected_adjustments = sum(a.amount_cents for a in self.adjustments if a.eligible)
        if self.adjustment_total_cents != expected_adjustments:
            violations.append(InvariantViolationError(
                "Adjustment total does not match eligible order adjustments",
                code="Order.InconsistentAdjustmentTotal",
                expected=expected_adjustments,
                actual=self.adjustment_total_cents,
            ))

        expected_total = self.item_total_cents + self.shipment_total_cents + self.adjustment_total_cents
        if self.total_cents != expected_total:
            violations.append(InvariantViolationError(
                "Total does not equal item, shipment and adjustment totals",
                code="Order.InconsistentTotal",
                expected=expected_total,
                actual=self.total_cents,
            ))

        if self.state == OrderState.COMPLETE and self.completed_at is None:
            violations.append(InvariantViolationError(
                "Completed order has no completion timestamp",
                code="Order.MissingCompletionTimestamp",
            ))
        if self.state == OrderState.CANCELED and self.canceled_at is None:
            violations.append(InvariantViolationError(
                "Canceled order has no cancellation timestamp",
                code="Order.MissingCancellationTimestamp",
            ))

        for payment in self.payments:
            if not 0 <= payment.refunded_amount_cents <= payment.amount_cents:
                violations.append(InvariantViolationError(
                    f"Payment '{payment.id}' refunded more than its amount",
                    code="Order.InconsistentPaymentRefund",
                    expected=payment.amount_cents,
                    actual=payment.refunded_amount_cents,
                ))

        promotion_adjustments = list(self.adjustments)
        for line in self.line_items:
            promotion_adjustments.extend(line.adjustments)
        for adjustment in promotion_adjustments:
            if adjustment.is_promotion and adjustment.promotion_id != self.promotion_id:
                violations.append(InvariantViolationError(
                    f"Adjustment '{adjustment.id}' belongs to an inactive promotion",
                    code="Order.OrphanedPromotionAdjustment",
                ))

        return violations


def _normalize_code(code: Optional[str]) -> Optional[str]:
    if code is None or not code.strip():
        return None
    return code.strip().upper()
