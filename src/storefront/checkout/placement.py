"""Checkout placement — command and handler.

The client normally sends the cart lines and the total it displayed. When
either is missing the handler falls back to the user's current cart and the
live catalogue prices.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.checkout.checkout import Checkout
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Checkout")
class PlaceCheckout:
    user_id = Identifier(required=True)
    address = Text(required=True)
    phone_number = String(required=True, max_length=30)
    email = String(required=True, max_length=254)
    items = Text()  # JSON: list of {productId, quantity}; omit to use the cart
    total_price = Float(min_value=0.0)  # Omit to compute from live prices
    receipt = String(max_length=500)


def _product_reference(raw):
    """Product id from a line, whether given as an id or as a resolved product document."""
    product = raw.get("productId", raw.get("product_id"))
    if isinstance(product, dict):
        product = product.get("id") or product.get("_id")
    return product


def parse_lines(payload) -> list[dict]:
    """Normalise client-supplied lines to ``{"product_id", "quantity"}`` mappings."""
    raw_lines = json.loads(payload) if isinstance(payload, str) else payload
    if not isinstance(raw_lines, list):
        raise ValidationError({"items": ["Items must be a list"]})

    lines = []
    for raw in raw_lines:
        product_id = _product_reference(raw) if isinstance(raw, dict) else None
        if not product_id:
            raise ValidationError({"items": ["Every item needs a productId"]})
        try:
            quantity = int(raw.get("quantity", 1))
        except (TypeError, ValueError):
            raise ValidationError({"items": ["Item quantity must be a whole number"]}) from None
        lines.append({"product_id": str(product_id), "quantity": quantity})
    return lines


@storefront.command_handler(part_of=Checkout)
class PlaceCheckoutHandler:
    @handle(PlaceCheckout)
    def place_checkout(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.find_for_user(command.user_id)

        if command.items:
            lines = parse_lines(command.items)
        elif cart is not None:
            lines = [{"product_id": str(i.product_id), "quantity": i.quantity} for i in cart.items]
        else:
            lines = []

        total_price = command.total_price
        if total_price is None:
            prices = current_domain.repository_for(Product).prices_for([line["product_id"] for line in lines])
            total_price = round(sum(prices.get(line["product_id"], 0.0) * line["quantity"] for line in lines), 2)

        checkout = Checkout.place(
            user_id=command.user_id,
            address=command.address,
            phone_number=command.phone_number,
            email=command.email,
            items=lines,
            total_price=total_price,
            receipt=command.receipt,
        )
        current_domain.repository_for(Checkout).add(checkout)

        if get_settings().clear_cart_on_checkout and cart is not None:
            cart.clear()
            cart_repo.add(cart)

        logger.info(
            "checkout_placed",
            checkout_id=str(checkout.id),
            user_id=str(command.user_id),
            total_price=total_price,
        )
        return str(checkout.id)
