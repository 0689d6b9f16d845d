"""Read side of feedback: listings with user and order references resolved."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.feedback.feedback import Feedback
from storefront.identity.user import User


def _iso(value):
    return value.isoformat() if value else None


def _newest_first(records):
    return sorted(records, key=lambda f: f.created_at, reverse=True)


def _user_reference(user, *fields):
    reference = {"id": str(user.id)}
    reference.update({field: getattr(user, field) for field in fields})
    return reference


def _order_reference(order, *fields):
    reference = {"id": str(order.id)}
    if "status" in fields:
        reference["status"] = order.status
    if "total_price" in fields:
        reference["totalPrice"] = order.total_price
    return reference


def feedback_document(feedback, user=None, order=None) -> dict:
    """Serialise a feedback. ``user`` and ``order`` replace the bare ids when given."""
    order_id = str(feedback.order_id) if feedback.order_id else None
    return {
        "id": str(feedback.id),
        "orderId": order if order is not None else order_id,
        "userId": user if user is not None else str(feedback.user_id),
        "userName": feedback.user_name,
        "rating": feedback.score,
        "comment": feedback.comment,
        "feedback": feedback.comment,
        "createdAt": _iso(feedback.created_at),
        "updatedAt": _iso(feedback.updated_at),
    }


def _resolve(records, user_fields=(), order_fields=()) -> list[dict]:
    users = current_domain.repository_for(User).find_many(f.user_id for f in records) if user_fields else {}
    orders = (
        current_domain.repository_for(Checkout).find_many(f.order_id for f in records if f.order_id)
        if order_fields
        else {}
    )

    documents = []
    for feedback in records:
        user = users.get(str(feedback.user_id))
        order = orders.get(str(feedback.order_id)) if feedback.order_id else None
        documents.append(
            feedback_document(
                feedback,
                user=_user_reference(user, *user_fields) if user else None,
                order=_order_reference(order, *order_fields) if order else None,
            )
        )
    return documents


def feedback_by_id(feedback_id) -> dict:
    try:
        feedback = current_domain.repository_for(Feedback).get(feedback_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"feedback_id": ["Feedback not found"]}) from None
    return feedback_document(feedback)


def feedback_for_order(order_id) -> dict:
    feedback = current_domain.repository_for(Feedback).find_by_order(order_id)
    if feedback is None:
        raise ObjectNotFoundError({"order_id": ["Feedback not found for this order"]})
    return _resolve([feedback], user_fields=("username", "email"))[0]


def feedback_for_user(user_id) -> list[dict]:
    records = current_domain.repository_for(Feedback).find_by_user(user_id)
    if not records:
        raise ObjectNotFoundError({"user_id": ["No feedback found for this user"]})
    return _resolve(_newest_first(records), order_fields=("status", "total_price"))


def feedback_for_product(product_id) -> list[dict]:
    """Feedback left on any order that contained the product."""
    orders = current_domain.repository_for(Checkout).find_by_product(product_id)
    if not orders:
        raise ObjectNotFoundError({"product_id": ["No orders found for this product"]})

    records = current_domain.repository_for(Feedback).find_by_orders(o.id for o in orders)
    return _resolve(_newest_first(records), user_fields=("username",), order_fields=("status",))


def all_feedback() -> list[dict]:
    """Moderation view: every feedback with its author and order resolved."""
    records = current_domain.repository_for(Feedback).find_all()
    return _resolve(
        _newest_first(records),
        user_fields=("username", "email"),
        order_fields=("status", "total_price"),
    )


def recent_feedback() -> list[dict]:
    return [feedback_document(f) for f in _newest_first(current_domain.repository_for(Feedback).find_all())]


def average_rating() -> dict:
    records = current_domain.repository_for(Feedback).find_all()
    if not records:
        return {"averageRating": 0, "totalFeedbacks": 0}

    scores = [f.score for f in records]
    return {"averageRating": sum(scores) / len(scores), "totalFeedbacks": len(scores)}
