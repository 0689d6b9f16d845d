"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """An employee added a product to the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    category = String()
    price = Float(required=True)
    quantity = Integer(required=True)
    status = String(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """Product details, price or stock were changed."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    previous_price = Float(required=True)
    quantity = Integer(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductStatusChanged:
    """A product was activated or deactivated."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)

