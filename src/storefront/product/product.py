"""Product aggregate — the catalogue entry a cart line or checkout line points at.

Products are created and maintained by employees. Carts read the price live
on every change, so a price update is reflected in every open cart total.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.product.events import (
    ProductCreated,
    ProductStatusChanged,
    ProductUpdated,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(default=0, min_value=0)  # Units in stock
    status = String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    images = Text()  # JSON array of image URLs
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and len(self.name.strip()) == 0:
            raise ValidationError({"name": ["Product name cannot be empty"]})

    @classmethod
    def create(cls, name, price, quantity=0, description=None, category=None, status=None, images=None):
        now = datetime.now(UTC)

        product = cls(
            name=name,
            description=description,
            category=category,
            price=price,
            quantity=quantity,
            status=status or ProductStatus.ACTIVE.value,
            images=json.dumps(images or []),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                quantity=product.quantity,
                status=product.status,
                created_at=now,
            )
        )
        return product

    @property
    def is_active(self):
        return self.status == ProductStatus.ACTIVE.value

    @property
    def image_urls(self):
        return json.loads(self.images) if self.images else []

    def update(
        self,
        name=_UNSET,
        description=_UNSET,
        category=_UNSET,
        price=_UNSET,
        quantity=_UNSET,
        images=_UNSET,
    ):
        """Partially update product details. Only provided fields change."""
        previous_price = self.price

        if name is not _UNSET:
            self.name = name
        if description is not _UNSET:
            self.description = description
        if category is not _UNSET:
            self.category = category
        if price is not _UNSET:
            self.price = price
        if quantity is not _UNSET:
            self.quantity = quantity
        if images is not _UNSET:
            self.images = json.dumps(images or [])

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                previous_price=previous_price,
                quantity=self.quantity,
                updated_at=now,
            )
        )

    def change_status(self, new_status=None):
        """Set the status explicitly, or flip active/inactive when none is given."""
        current = ProductStatus(self.status)
        if new_status is None:
            target = ProductStatus.INACTIVE if current == ProductStatus.ACTIVE else ProductStatus.ACTIVE
        else:
            try:
                target = ProductStatus(new_status)
            except ValueError:
                raise ValidationError({"status": [f"Invalid product status: {new_status}"]}) from None

        if target == current:
            return

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            ProductStatusChanged(
                product_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def to_summary(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "quantity": self.quantity,
            "status": self.status,
            "images": self.image_urls,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
