"""Repository for the Product aggregate."""

from storefront.domain import storefront
from storefront.product.product import Product, ProductStatus


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_all(self) -> list[Product]:
        return self._dao.query.all().items

    def find_active(self) -> list[Product]:
        return self._dao.query.filter(status=ProductStatus.ACTIVE.value).all().items

    def find_many(self, product_ids) -> dict[str, Product]:
        """Load the given products keyed by id. Missing ids are skipped."""
        wanted = list({str(pid) for pid in product_ids})
        if not wanted:
            return {}
        products = self._dao.query.filter(id__in=wanted).all().items
        return {str(p.id): p for p in products}

    def prices_for(self, product_ids) -> dict[str, float]:
        return {pid: product.price for pid, product in self.find_many(product_ids).items()}

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
