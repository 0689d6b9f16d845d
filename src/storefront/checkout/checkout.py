"""Checkout aggregate — a placed order and its fulfilment status.

State machine:
    Pending → Processing → Shipped → Delivered
    Pending/Processing → Cancelled

Progress may skip forward (Pending → Delivered is allowed) but never moves
back, and an order can no longer be cancelled once shipped. Delivered and
Cancelled are terminal.

Item lines carry only the product reference and quantity. Prices are read
live from the catalogue when the order is displayed; ``total_price`` is the
amount the customer was shown when placing the order.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.checkout.events import CheckoutPlaced, CheckoutStatusChanged
from storefront.domain import storefront


class CheckoutStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


_VALID_TRANSITIONS = {
    CheckoutStatus.PENDING: {
        CheckoutStatus.PROCESSING,
        CheckoutStatus.SHIPPED,
        CheckoutStatus.DELIVERED,
        CheckoutStatus.CANCELLED,
    },
    CheckoutStatus.PROCESSING: {
        CheckoutStatus.SHIPPED,
        CheckoutStatus.DELIVERED,
        CheckoutStatus.CANCELLED,
    },
    CheckoutStatus.SHIPPED: {CheckoutStatus.DELIVERED},
    CheckoutStatus.DELIVERED: set(),  # Terminal
    CheckoutStatus.CANCELLED: set(),  # Terminal
}


def parse_status(value) -> CheckoutStatus:
    try:
        return CheckoutStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Invalid status: {value}"]}) from None


@storefront.entity(part_of="Checkout")
class CheckoutItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.aggregate
class Checkout:
    user_id = Identifier(required=True)
    items = HasMany(CheckoutItem)
    address = Text(required=True)
    phone_number = String(required=True, max_length=30)
    email = String(required=True, max_length=254)
    total_price = Float(required=True, min_value=0.0)
    status = String(max_length=20, choices=CheckoutStatus, default=CheckoutStatus.PENDING.value)
    receipt = String(max_length=500)  # Reference to an uploaded receipt file
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, address, phone_number, email, items, total_price, receipt=None):
        """Place a new order in Pending status.

        ``items`` is a list of ``{"product_id", "quantity"}`` mappings.
        """
        if not items:
            raise ValidationError({"items": ["Checkout must contain at least one item"]})

        now = datetime.now(UTC)
        checkout = cls(
            user_id=user_id,
            items=[CheckoutItem(product_id=str(i["product_id"]), quantity=i["quantity"]) for i in items],
            address=address,
            phone_number=phone_number,
            email=email,
            total_price=total_price,
            status=CheckoutStatus.PENDING.value,
            receipt=receipt,
            created_at=now,
            updated_at=now,
        )

        checkout.raise_(
            CheckoutPlaced(
                checkout_id=str(checkout.id),
                user_id=str(user_id),
                item_count=sum(i.quantity for i in checkout.items),
                total_price=total_price,
                placed_at=now,
            )
        )

        return checkout

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_delivered(self):
        return self.status == CheckoutStatus.DELIVERED.value

    @property
    def product_ids(self):
        return [str(item.product_id) for item in self.items]

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = CheckoutStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, new_status, enforce_transitions=True):
        """Move the order to ``new_status``.

        Setting the current status again changes nothing. With
        ``enforce_transitions`` off any status may follow any other.
        """
        target = parse_status(new_status)
        if target.value == self.status:
            return

        if enforce_transitions:
            self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            CheckoutStatusChanged(
                checkout_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
