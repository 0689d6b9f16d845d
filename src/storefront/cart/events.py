"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or an existing line was topped up."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # Units added by this action
    line_quantity = Integer(required=True)  # Units on the line afterwards
    total_price = Float(required=True)


@storefront.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart line was set to a new value."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_price = Float(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    total_price = Float(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed from the cart at once."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    items_removed = Integer(required=True)
    cleared_at = DateTime(required=True)
