"""Repository for the Checkout aggregate."""

from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout, CheckoutItem
from storefront.domain import storefront


@storefront.repository(part_of=Checkout)
class CheckoutRepository:
    def find_all(self) -> list[Checkout]:
        return self._dao.query.all().items

    def find_by_user(self, user_id) -> list[Checkout]:
        return self._dao.query.filter(user_id=str(user_id)).all().items

    def find_by_product(self, product_id) -> list[Checkout]:
        """Checkouts with a line for the given product.

        Lines are matched first; only their owning checkouts are loaded.
        """
        lines = current_domain.repository_for(CheckoutItem)._dao.query.filter(product_id=str(product_id)).all().items
        return list(self.find_many(line.checkout_id for line in lines).values())

    def find_many(self, checkout_ids) -> dict[str, Checkout]:
        wanted = list({str(cid) for cid in checkout_ids if cid})
        if not wanted:
            return {}
        checkouts = self._dao.query.filter(id__in=wanted).all().items
        return {str(c.id): c for c in checkouts}

    def remove(self, checkout: Checkout) -> None:
        self._dao.delete(checkout)
