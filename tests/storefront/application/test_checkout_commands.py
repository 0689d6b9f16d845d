"""Application tests for checkout placement, status changes and deletion."""

import json

import pytest
from protean import current_domain
from protean.exceptions import InvalidDataError, ObjectNotFoundError, ValidationError
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, RemoveFromCart
from storefront.cart.queries import cart_details
from storefront.checkout.checkout import Checkout
from storefront.checkout.placement import PlaceCheckout
from storefront.checkout.queries import checkout_details, list_checkouts
from storefront.checkout.removal import DeleteCheckout
from storefront.checkout.status import UpdateCheckoutStatus
from storefront.identity.registration import RegisterUser
from storefront.product.management import CreateProduct, DeleteProduct


def _create_product(name="Desk Lamp", price=10.0):
    return current_domain.process(CreateProduct(name=name, price=price, quantity=20), asynchronous=False)


def _register(username="jane", email="jane@example.com"):
    return current_domain.process(
        RegisterUser(username=username, email=email, password="s3cret-pass"),
        asynchronous=False,
    )


def _place(user_id, **overrides):
    defaults = {
        "user_id": user_id,
        "address": "12 Harbour Road, Colombo",
        "phone_number": "0771234567",
        "email": "jane@example.com",
    }
    defaults.update(overrides)
    return current_domain.process(PlaceCheckout(**defaults), asynchronous=False)


def _set_status(checkout_id, status):
    return current_domain.process(UpdateCheckoutStatus(checkout_id=checkout_id, status=status), asynchronous=False)


class TestPlaceCheckout:
    def test_place_with_client_items_and_total(self):
        product_id = _create_product()
        checkout_id = _place(
            "user-co-1",
            items=json.dumps([{"productId": product_id, "quantity": 2}]),
            total_price=19.99,
        )

        checkout = current_domain.repository_for(Checkout).get(checkout_id)
        assert checkout.status == "Pending"
        assert checkout.total_price == 19.99  # Client total is trusted
        assert checkout.product_ids == [product_id]

    def test_resolved_product_documents_accepted_as_items(self):
        product_id = _create_product()
        items = [{"productId": {"id": product_id, "name": "Desk Lamp"}, "quantity": 1}]
        checkout_id = _place("user-co-2", items=json.dumps(items), total_price=10.0)
        assert current_domain.repository_for(Checkout).get(checkout_id).product_ids == [product_id]

    def test_cart_snapshot_when_items_omitted(self):
        product_id = _create_product(price=7.5)
        current_domain.process(AddToCart(user_id="user-co-3", product_id=product_id, quantity=2), asynchronous=False)

        checkout_id = _place("user-co-3")
        checkout = current_domain.repository_for(Checkout).get(checkout_id)
        assert checkout.items[0].quantity == 2
        assert checkout.total_price == 15.0

    def test_cart_kept_by_default(self):
        product_id = _create_product()
        current_domain.process(AddToCart(user_id="user-co-4", product_id=product_id, quantity=1), asynchronous=False)
        _place("user-co-4")
        assert cart_details("user-co-4") is not None

    def test_cart_cleared_when_configured(self, settings_env):
        settings_env(clear_cart_on_checkout=True)
        product_id = _create_product()
        current_domain.process(AddToCart(user_id="user-co-5", product_id=product_id, quantity=1), asynchronous=False)
        _place("user-co-5")
        assert cart_details("user-co-5") is None

    def test_no_items_and_no_cart_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place("user-co-6")
        assert "Checkout must contain at least one item" in str(exc.value)

    def test_missing_address_rejected(self):
        product_id = _create_product()
        with pytest.raises(InvalidDataError) as exc:
            _place(
                "user-co-7",
                address=None,
                items=json.dumps([{"productId": product_id, "quantity": 1}]),
            )
        assert "address" in exc.value.messages


class TestUpdateStatus:
    def _checkout(self):
        product_id = _create_product()
        return _place("user-st", items=json.dumps([{"productId": product_id, "quantity": 1}]), total_price=10.0)

    def test_forward_progress(self):
        checkout_id = self._checkout()
        assert _set_status(checkout_id, "Processing") == "Processing"
        assert _set_status(checkout_id, "Delivered") == "Delivered"

    def test_backwards_rejected(self):
        checkout_id = self._checkout()
        _set_status(checkout_id, "Shipped")
        with pytest.raises(ValidationError) as exc:
            _set_status(checkout_id, "Pending")
        assert "Cannot transition from Shipped to Pending" in str(exc.value)

    def test_unenforced_allows_any_order(self, settings_env):
        settings_env(enforce_status_transitions=False)
        checkout_id = self._checkout()
        _set_status(checkout_id, "Delivered")
        assert _set_status(checkout_id, "Pending") == "Pending"

    def test_unknown_checkout_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            _set_status("missing-checkout", "Processing")

    def test_invalid_status_rejected(self):
        checkout_id = self._checkout()
        with pytest.raises(ValidationError):
            _set_status(checkout_id, "Teleported")


class TestDeleteCheckout:
    def test_delete(self):
        product_id = _create_product()
        checkout_id = _place("user-del", items=json.dumps([{"productId": product_id, "quantity": 1}]), total_price=10.0)
        current_domain.process(DeleteCheckout(checkout_id=checkout_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Checkout).get(checkout_id)

    def test_delete_unknown_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteCheckout(checkout_id="missing"), asynchronous=False)


class TestCheckoutQueries:
    def test_details_resolve_user_and_products(self):
        user_id = _register()
        product_id = _create_product(name="Desk Lamp")
        checkout_id = _place(user_id, items=json.dumps([{"productId": product_id, "quantity": 2}]), total_price=20.0)

        details = checkout_details(checkout_id)
        assert details["userId"]["username"] == "jane"
        assert details["items"][0]["productId"]["name"] == "Desk Lamp"
        assert details["phoneNumber"] == "0771234567"

    def test_list_newest_first(self):
        user_id = _register()
        product_id = _create_product()
        items = json.dumps([{"productId": product_id, "quantity": 1}])
        first = _place(user_id, items=items, total_price=10.0)
        second = _place(user_id, items=items, total_price=10.0)

        listed = [c["id"] for c in list_checkouts()]
        assert listed == [second, first]
        assert list_checkouts()[0]["userId"]["email"] == "jane@example.com"


class TestProductDeletionGuard:
    def test_product_in_order_cannot_be_deleted(self):
        product_id = _create_product()
        _place("user-guard", items=json.dumps([{"productId": product_id, "quantity": 1}]), total_price=10.0)
        with pytest.raises(ValidationError) as exc:
            current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        assert "deactivate it instead" in str(exc.value)

    def test_product_in_cart_cannot_be_deleted(self):
        product_id = _create_product()
        current_domain.process(AddToCart(user_id="user-guard-2", product_id=product_id), asynchronous=False)
        with pytest.raises(ValidationError):
            current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

    def test_unreferenced_product_deleted(self):
        from storefront.product.product import Product

        product_id = _create_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

    def test_product_removed_from_cart_can_be_deleted(self):
        product_id = _create_product()
        current_domain.process(AddToCart(user_id="user-guard-3", product_id=product_id), asynchronous=False)
        current_domain.process(RemoveFromCart(user_id="user-guard-3", product_id=product_id), asynchronous=False)
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)


class TestFindByProduct:
    def test_only_carts_holding_the_product(self):
        lamp = _create_product()
        chair = _create_product(name="Chair", price=40.0)
        current_domain.process(AddToCart(user_id="user-fp-1", product_id=lamp), asynchronous=False)
        current_domain.process(AddToCart(user_id="user-fp-2", product_id=chair), asynchronous=False)
        current_domain.process(AddToCart(user_id="user-fp-3", product_id=lamp, quantity=2), asynchronous=False)

        carts = current_domain.repository_for(Cart).find_by_product(lamp)
        assert sorted(cart.user_id for cart in carts) == ["user-fp-1", "user-fp-3"]

    def test_only_checkouts_holding_the_product(self):
        lamp = _create_product()
        chair = _create_product(name="Chair", price=40.0)
        with_lamp = _place("user-fp-4", items=json.dumps([{"productId": lamp, "quantity": 1}]), total_price=10.0)
        _place("user-fp-5", items=json.dumps([{"productId": chair, "quantity": 1}]), total_price=40.0)

        checkouts = current_domain.repository_for(Checkout).find_by_product(lamp)
        assert [str(checkout.id) for checkout in checkouts] == [with_lamp]

    def test_unreferenced_product_matches_nothing(self):
        product_id = _create_product()
        assert current_domain.repository_for(Cart).find_by_product(product_id) == []
        assert current_domain.repository_for(Checkout).find_by_product(product_id) == []
