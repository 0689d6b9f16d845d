"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers
from storefront.cart.items import AddToCart
from storefront.product.management import CreateProduct


@pytest.fixture()
def products():
    """Product ids keyed by name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:f}'))
def a_product(products, name, price):
    products[name] = current_domain.process(CreateProduct(name=name, price=price, quantity=50), asynchronous=False)


@given(parsers.cfparse('user "{user_id}" has {quantity:d} of "{name}" in the cart'))
def cart_with_line(products, user_id, quantity, name):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=products[name], quantity=quantity),
        asynchronous=False,
    )
