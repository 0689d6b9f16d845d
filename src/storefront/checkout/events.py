"""Domain events for the Checkout aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Checkout")
class CheckoutPlaced:
    """A customer placed an order from their cart."""

    __version__ = "v1"

    checkout_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total_price = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Checkout")
class CheckoutStatusChanged:
    """An employee moved the order to a new status."""

    __version__ = "v1"

    checkout_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
