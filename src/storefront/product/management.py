"""Catalogue management — commands and handler.

Employee-only operations. The API layer checks the employee session before
any of these commands is built.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.checkout.checkout import Checkout
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(default=0, min_value=0)
    status = String(max_length=20)
    images = Text()  # JSON array of image URLs


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object with only the fields to change


@storefront.command(part_of="Product")
class ChangeProductStatus:
    product_id = Identifier(required=True)
    status = String(max_length=20)  # Omit to toggle active/inactive


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


_UPDATABLE_FIELDS = ("name", "description", "category", "price", "quantity", "images")


def load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"product_id": ["Product not found"]}) from None


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            category=command.category,
            price=command.price,
            quantity=command.quantity or 0,
            status=command.status,
            images=json.loads(command.images) if command.images else None,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = load_product(command.product_id)

        changes = json.loads(command.changes)
        kwargs = {key: changes[key] for key in _UPDATABLE_FIELDS if key in changes}
        product.update(**kwargs)
        repo.add(product)

    @handle(ChangeProductStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(Product)
        product = load_product(command.product_id)
        product.change_status(command.status)
        repo.add(product)
        return product.status

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = load_product(command.product_id)

        in_carts = current_domain.repository_for(Cart).find_by_product(command.product_id)
        in_orders = current_domain.repository_for(Checkout).find_by_product(command.product_id)
        if in_carts or in_orders:
            raise ValidationError(
                {"product": ["Product is referenced by existing carts or orders; deactivate it instead"]}
            )

        repo.remove(product)
        logger.info("product_deleted", product_id=str(command.product_id))
