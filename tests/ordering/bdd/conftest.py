"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved
from ordering.shared.money import Money
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then

_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartItemRemoved": CartItemRemoved,
    "CartCleared": CartCleared,
}


@pytest.fixture()
def error():
    """Container for the error raised by the last When step."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    return ShoppingCart.create("user-bdd-001")


@given(
    parsers.cfparse('the cart holds {qty:d} of "{product_id}" at ${price:g}'),
    target_fixture="cart",
)
def cart_holds(cart, qty, product_id, price):
    cart.add_item(product_id, qty, Money.of(price))
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is rejected with "{message}"'))
def rejected_with(error, message):
    exc = error["exc"]
    assert isinstance(exc, ValidationError)
    assert message in [m for msgs in exc.messages.values() for m in msgs]


@then("the request is rejected as not found")
def rejected_not_found(error):
    assert isinstance(error["exc"], ObjectNotFoundError)


@then("the request is accepted")
def accepted(error):
    assert error["exc"] is None


@then(parsers.cfparse('a {event_type} event is raised'))
def event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in cart._events)


@then("no event is raised")
def no_event(cart):
    assert cart._events == []


@then(parsers.cfparse("the cart total is ${amount}"))
def cart_total(cart, amount):
    assert str(cart.total_amount.decimal) == amount
