"""Shared BDD fixtures and step definitions for the marketplace."""

import pytest
from marketplace.cart.cart import Cart
from marketplace.cart.items import AddToCart
from marketplace.exceptions import EmptyCartError, InsufficientStockError
from marketplace.order.order import Order
from marketplace.order.placement import PlaceOrder
from marketplace.product.product import Product
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

ADDRESS = {
    "full_name": "Alice Buyer",
    "address": "12 Green Lane",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "USA",
}


@pytest.fixture()
def error():
    """Holds the exception raised by a When step, if any."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def placed():
    return {"order_id": None}


def _stock_of(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


def _cart(buyer_id):
    return current_domain.repository_for(Cart).find_for_user(buyer_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with stock {stock:d}'))
def a_product(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('the buyer has {qty:d} of "{name}" in the cart'))
def buyer_has_in_cart(buyer_id, products, qty, name):
    current_domain.process(AddToCart(user_id=buyer_id, product_id=products[name], quantity=qty), asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
def _place(buyer_id, placed, error, **overrides):
    try:
        command = PlaceOrder(user_id=buyer_id, **{**ADDRESS, **overrides})
        placed["order_id"] = current_domain.process(command, asynchronous=False)
    except (ValidationError, EmptyCartError, InsufficientStockError) as exc:
        error["exc"] = exc


@when("the buyer places an order")
def buyer_places_order(buyer_id, placed, error):
    _place(buyer_id, placed, error)


@when("the buyer places an order without a city")
def buyer_places_order_without_city(buyer_id, placed, error):
    _place(buyer_id, placed, error, city=None)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has stock {stock:d}'))
def product_has_stock(products, name, stock):
    assert _stock_of(products[name]) == stock


@then("the buyer's cart is empty")
def cart_is_empty(buyer_id):
    assert _cart(buyer_id).is_empty


@then("the buyer has no orders")
def buyer_has_no_orders(buyer_id):
    assert current_domain.repository_for(Order).for_user(buyer_id) == []


def _assert_stock_rejection(error, name):
    assert isinstance(error["exc"], InsufficientStockError)
    assert error["exc"].product_name == name


@then(parsers.cfparse('the order is rejected for insufficient stock of "{name}"'))
def order_rejected_for_stock(error, name):
    _assert_stock_rejection(error, name)


@then(parsers.cfparse('the change is rejected for insufficient stock of "{name}"'))
def change_rejected_for_stock(error, name):
    _assert_stock_rejection(error, name)
