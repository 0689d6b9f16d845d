"""Repository for the Cart aggregate."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, CartItem
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id) -> Cart | None:
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        return carts[0] if carts else None

    def find_by_product(self, product_id) -> list[Cart]:
        """Carts with a line for the given product.

        Lines are matched first; only their owning carts are loaded.
        """
        lines = current_domain.repository_for(CartItem)._dao.query.filter(product_id=str(product_id)).all().items
        owners = list({str(line.cart_user_id) for line in lines})
        if not owners:
            return []
        return self._dao.query.filter(user_id__in=owners).all().items
