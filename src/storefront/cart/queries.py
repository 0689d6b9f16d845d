"""Read side of the cart: the resolved cart document the client renders."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.product.product import Product


def cart_details(user_id) -> dict | None:
    """The user's cart with product details resolved, or ``None`` when absent or empty.

    The total is recomputed from the current catalogue prices on every read.
    """
    cart = current_domain.repository_for(Cart).find_for_user(user_id)
    if cart is None or cart.is_empty:
        return None

    products = current_domain.repository_for(Product).find_many(cart.product_ids)
    prices = {pid: product.price for pid, product in products.items()}

    items = []
    for item in cart.items:
        product = products.get(str(item.product_id))
        unit_price = product.price if product else 0.0
        items.append(
            {
                "productId": product.to_summary() if product else None,
                "quantity": item.quantity,
                "unitPrice": unit_price,
                "subtotal": round(unit_price * item.quantity, 2),
            }
        )

    return {
        "userId": str(cart.user_id),
        "items": items,
        "totalPrice": cart.compute_total(prices),
        "updatedAt": cart.updated_at.isoformat() if cart.updated_at else None,
    }
