"""Read side of checkouts: resolved order documents for the admin screens."""

from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.identity.user import User
from storefront.product.product import Product


def _iso(value):
    return value.isoformat() if value else None


def _user_reference(user):
    if user is None:
        return None
    return {"id": str(user.id), "username": user.username, "email": user.email}


def checkout_document(checkout, user=None, products=None) -> dict:
    """Serialise a checkout; lines resolve to product summaries when ``products`` is given."""
    items = []
    for item in checkout.items:
        product_id = str(item.product_id)
        if products is not None:
            product = products.get(product_id)
            product_id = product.to_summary() if product else None
        items.append({"productId": product_id, "quantity": item.quantity})

    return {
        "id": str(checkout.id),
        "userId": _user_reference(user) if user is not None else str(checkout.user_id),
        "items": items,
        "address": checkout.address,
        "phoneNumber": checkout.phone_number,
        "email": checkout.email,
        "totalPrice": checkout.total_price,
        "status": checkout.status,
        "receipt": checkout.receipt,
        "createdAt": _iso(checkout.created_at),
        "updatedAt": _iso(checkout.updated_at),
    }


def checkout_details(checkout_id) -> dict:
    """One checkout with its user and its lines resolved to live product details."""
    checkout = current_domain.repository_for(Checkout).get(checkout_id)
    users = current_domain.repository_for(User).find_many([checkout.user_id])
    products = current_domain.repository_for(Product).find_many(checkout.product_ids)
    return checkout_document(checkout, users.get(str(checkout.user_id)), products)


def list_checkouts() -> list[dict]:
    """Every checkout, newest first, each with a lightweight user reference."""
    checkouts = current_domain.repository_for(Checkout).find_all()
    users = current_domain.repository_for(User).find_many(c.user_id for c in checkouts)

    checkouts.sort(key=lambda c: c.created_at, reverse=True)
    return [checkout_document(c, users.get(str(c.user_id))) for c in checkouts]
