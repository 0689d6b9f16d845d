"""Shopping Cart aggregate — one mutable cart per user.

The cart's identity is the owning user's id, so a user can never hold two
carts. ``total_price`` is derived: it is recomputed from live product prices
whenever a line changes, and callers pass in the prices they just read. A
price change in the catalogue therefore shows up in the next total.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront

MIN_LINE_QUANTITY = 1
MAX_LINE_QUANTITY = 10


def _check_line_quantity(quantity):
    if quantity is None or quantity < MIN_LINE_QUANTITY:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})
    if quantity > MAX_LINE_QUANTITY:
        raise ValidationError({"quantity": [f"Maximum quantity allowed is {MAX_LINE_QUANTITY}"]})


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=MIN_LINE_QUANTITY, max_value=MAX_LINE_QUANTITY)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(identifier=True, required=True)
    items = HasMany(CartItem)
    total_price = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(
            user_id=str(user_id),
            total_price=0.0,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_empty(self):
        return not self.items

    @property
    def product_ids(self):
        return [str(item.product_id) for item in self.items]

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def compute_total(self, prices):
        """Sum of unit price x quantity over all lines, using ``prices`` keyed by product id."""
        total = sum(prices.get(str(item.product_id), 0.0) * item.quantity for item in self.items)
        return round(total, 2)

    def recalculate_total(self, prices):
        self.total_price = self.compute_total(prices)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, prices):
        """Add a product, or increase the quantity of its existing line."""
        _check_line_quantity(quantity)

        now = datetime.now(UTC)
        existing = self.line_for(product_id)

        if existing:
            new_quantity = existing.quantity + quantity
            _check_line_quantity(new_quantity)
            existing.quantity = new_quantity
            line_quantity = new_quantity
        else:
            self.add_items(
                CartItem(
                    product_id=str(product_id),
                    quantity=quantity,
                    added_at=now,
                )
            )
            line_quantity = quantity

        self.recalculate_total(prices)
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                user_id=str(self.user_id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
                total_price=self.total_price,
            )
        )

    def update_item_quantity(self, product_id, new_quantity, prices):
        """Set a line's quantity. The line must already exist."""
        _check_line_quantity(new_quantity)

        item = self.line_for(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": ["Product not found in cart"]})

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.recalculate_total(prices)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                user_id=str(self.user_id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                total_price=self.total_price,
            )
        )

    def remove_item(self, product_id, prices):
        item = self.line_for(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": ["Product not found in cart"]})

        self.remove_items(item)
        self.recalculate_total(prices)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                user_id=str(self.user_id),
                product_id=str(product_id),
                total_price=self.total_price,
            )
        )

    def clear(self):
        """Remove every line at once."""
        if self.is_empty:
            return

        count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)

        now = datetime.now(UTC)
        self.total_price = 0.0
        self.updated_at = now

        self.raise_(
            CartCleared(
                user_id=str(self.user_id),
                items_removed=count,
                cleared_at=now,
            )
        )
