"""Application tests for feedback read queries."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from storefront.checkout.placement import PlaceCheckout
from storefront.checkout.status import UpdateCheckoutStatus
from storefront.feedback.queries import (
    all_feedback,
    average_rating,
    feedback_by_id,
    feedback_for_order,
    feedback_for_product,
    feedback_for_user,
    recent_feedback,
)
from storefront.feedback.submission import AddFeedback, SubmitOrderFeedback
from storefront.identity.registration import RegisterUser
from storefront.product.management import CreateProduct


def _register():
    return current_domain.process(
        RegisterUser(username="jane", email="jane@example.com", password="s3cret-pass"),
        asynchronous=False,
    )


def _product(name="Desk Lamp"):
    return current_domain.process(CreateProduct(name=name, price=10.0), asynchronous=False)


def _delivered_order(user_id, product_id):
    checkout_id = current_domain.process(
        PlaceCheckout(
            user_id=user_id,
            address="12 Harbour Road",
            phone_number="0771234567",
            email="jane@example.com",
            items=json.dumps([{"productId": product_id, "quantity": 1}]),
            total_price=10.0,
        ),
        asynchronous=False,
    )
    current_domain.process(UpdateCheckoutStatus(checkout_id=checkout_id, status="Delivered"), asynchronous=False)
    return checkout_id


def _submit(order_id, user_id, rating=None):
    return current_domain.process(
        SubmitOrderFeedback(order_id=order_id, user_id=user_id, feedback="Lovely lamp", rating=rating),
        asynchronous=False,
    )


def _add(rating):
    return current_domain.process(
        AddFeedback(user_id="user-avg", user_name="avg", rating=rating, comment="Rated"),
        asynchronous=False,
    )


class TestAverageRating:
    def test_average_of_five_three_four(self):
        for rating in (5, 3, 4):
            _add(rating)
        assert average_rating() == {"averageRating": 4.0, "totalFeedbacks": 3}

    def test_empty(self):
        assert average_rating() == {"averageRating": 0, "totalFeedbacks": 0}


class TestOrderAndUserLookups:
    def test_feedback_for_order_resolves_author(self):
        user_id = _register()
        order_id = _delivered_order(user_id, _product())
        _submit(order_id, user_id)

        document = feedback_for_order(order_id)
        assert document["userId"]["username"] == "jane"
        assert document["feedback"] == "Lovely lamp"

    def test_feedback_for_order_missing(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            feedback_for_order("order-none")
        assert "Feedback not found for this order" in str(exc.value)

    def test_feedback_for_user_resolves_order(self):
        user_id = _register()
        order_id = _delivered_order(user_id, _product())
        _submit(order_id, user_id)

        documents = feedback_for_user(user_id)
        assert len(documents) == 1
        assert documents[0]["orderId"] == {"id": order_id, "status": "Delivered", "totalPrice": 10.0}

    def test_feedback_for_user_missing(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            feedback_for_user("user-silent")
        assert "No feedback found for this user" in str(exc.value)

    def test_feedback_by_id_missing(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            feedback_by_id("missing")
        assert "Feedback not found" in str(exc.value)


class TestProductLookup:
    def test_feedback_for_product_via_orders(self):
        user_id = _register()
        lamp = _product("Desk Lamp")
        chair = _product("Chair")
        lamp_order = _delivered_order(user_id, lamp)
        chair_order = _delivered_order(user_id, chair)
        _submit(lamp_order, user_id, rating=4)
        _submit(chair_order, user_id, rating=2)

        documents = feedback_for_product(lamp)
        assert [d["rating"] for d in documents] == [4]
        assert documents[0]["userId"]["username"] == "jane"
        assert documents[0]["orderId"]["status"] == "Delivered"

    def test_product_never_ordered(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            feedback_for_product(_product())
        assert "No orders found for this product" in str(exc.value)

    def test_ordered_product_without_feedback_is_empty(self):
        product_id = _product()
        _delivered_order("user-quiet", product_id)
        assert feedback_for_product(product_id) == []


class TestListings:
    def test_recent_feedback_newest_first(self):
        first = _add(5)
        second = _add(3)
        assert [d["id"] for d in recent_feedback()] == [second, first]

    def test_all_feedback_resolves_references(self):
        user_id = _register()
        order_id = _delivered_order(user_id, _product())
        _submit(order_id, user_id)

        documents = all_feedback()
        assert documents[0]["userId"]["email"] == "jane@example.com"
        assert documents[0]["orderId"]["totalPrice"] == 10.0
