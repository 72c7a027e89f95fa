"""BDD tests for cart and checkout."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from bookstore.cart.store import CartStore
from bookstore.checkout.coordinator import CheckoutCoordinator
from bookstore.members.authentication import AuthContext
from bookstore.order.order import Order
from bookstore.order.queries import OrderQueries
from bookstore.order.repository import OrderRepository
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/checkout.feature")


@pytest.fixture()
def placed():
    return {"order_id": None}


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the member adds {qty:d} of "{isbn}" to the cart'))
def add_to_cart(member_id, capture, qty, isbn):
    capture(CartStore().add_item, member_id, isbn, qty)


@when("the member checks out")
def checkout(member_id, capture, placed):
    placed["order_id"] = capture(CheckoutCoordinator().checkout, AuthContext.for_member(member_id))


@when("the member checks out while the store rejects writes")
def checkout_with_failing_store(member_id, capture, placed):
    with patch.object(OrderRepository, "add", side_effect=RuntimeError("write rejected")):
        placed["order_id"] = capture(CheckoutCoordinator().checkout, AuthContext.for_member(member_id))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
def _order(member_id, placed):
    return OrderQueries().get_order(placed["order_id"], member_id)


@then(parsers.cfparse('the order has a line for "{isbn}" with quantity {qty:d} and amount {amount}'))
def order_line(member_id, placed, isbn, qty, amount):
    line = _order(member_id, placed).line_for(isbn)
    assert line.quantity == qty
    assert line.amount_value() == Decimal(amount)


@then(parsers.cfparse("the order total is {total}"))
def order_total(member_id, placed, total):
    assert _order(member_id, placed).total() == Decimal(total)


@then("the member's cart is empty")
def cart_is_empty(member_id):
    assert CartStore().snapshot(member_id) == []


@then(parsers.cfparse('the member\'s cart holds {qty:d} of "{isbn}"'))
def cart_holds(member_id, qty, isbn):
    assert [(line.isbn, line.quantity) for line in CartStore().snapshot(member_id)] == [(isbn, qty)]


@then("no order exists")
def no_order():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
