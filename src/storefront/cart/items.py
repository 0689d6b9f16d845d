"""Cart item management — commands and handler.

A user's cart is created on the first successful add. Every change
recomputes the cart total from the live catalogue prices.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.product.management import load_product
from storefront.product.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@storefront.command(part_of="Cart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def load_cart(user_id) -> Cart:
    cart = current_domain.repository_for(Cart).find_for_user(user_id)
    if cart is None:
        raise ObjectNotFoundError({"cart": ["Cart not found"]})
    return cart


def _prices(cart, *extra_product_ids):
    return current_domain.repository_for(Product).prices_for(cart.product_ids + list(extra_product_ids))


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = load_product(command.product_id)
        if not product.is_active:
            raise ValidationError({"product_id": ["Product is not available"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id) or Cart.create(command.user_id)
        cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            prices=_prices(cart, command.product_id),
        )
        repo.add(cart)

        logger.info(
            "cart_item_added",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            total_price=cart.total_price,
        )
        return cart.total_price

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = load_cart(command.user_id)
        cart.update_item_quantity(
            product_id=command.product_id,
            new_quantity=command.quantity,
            prices=_prices(cart),
        )
        current_domain.repository_for(Cart).add(cart)
        return cart.total_price

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.user_id)
        cart.remove_item(product_id=command.product_id, prices=_prices(cart))
        current_domain.repository_for(Cart).add(cart)
        return cart.total_price

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.user_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
