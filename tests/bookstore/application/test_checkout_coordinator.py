"""Application tests for checkout: cart to order, all or nothing."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from bookstore.cart.store import CartStore
from bookstore.checkout.coordinator import CheckoutCoordinator, CheckoutStage
from bookstore.exceptions import EmptyCart, NotFound, StoreFailure, Unauthenticated
from bookstore.members.authentication import AuthContext
from bookstore.order.order import Order
from bookstore.order.queries import OrderQueries
from bookstore.order.repository import OrderRepository
from protean import current_domain


@pytest.fixture()
def cart():
    return CartStore()


@pytest.fixture()
def coordinator(cart):
    return CheckoutCoordinator(cart_store=cart)


@pytest.fixture()
def auth(member_id):
    return AuthContext.for_member(member_id, name="Ada")


def _order_count():
    return current_domain.repository_for(Order)._dao.query.all().total


class TestCheckout:
    def test_end_to_end(self, coordinator, cart, auth, books):
        cart.add_item(auth.member_id, "B1", 2)
        cart.add_item(auth.member_id, "B1", 3)
        cart.add_item(auth.member_id, "B2", 1)

        order_id = coordinator.checkout(auth)

        order = OrderQueries().get_order(order_id, auth.member_id)
        b1, b2 = order.line_for("B1"), order.line_for("B2")
        assert (b1.quantity, b1.amount_value()) == (5, Decimal("50.00"))
        assert (b2.quantity, b2.amount_value()) == (1, Decimal("5.50"))
        assert order.total() == Decimal("55.50")
        assert cart.snapshot(auth.member_id) == []

    def test_order_copies_member_address(self, coordinator, cart, auth, books):
        cart.add_item(auth.member_id, "B1", 1)
        order = OrderQueries().get_order(coordinator.checkout(auth), auth.member_id)
        assert order.shipping_address.street == "12 Analytical Way"
        assert order.shipping_address.postal_code == "10001"

    def test_price_is_read_at_checkout(self, coordinator, cart, auth, books):
        from bookstore.catalogue.book import Book

        cart.add_item(auth.member_id, "B1", 2)
        repo = current_domain.repository_for(Book)
        book = repo.get("B1")
        book.price = 12.25
        repo.add(book)

        order = OrderQueries().get_order(coordinator.checkout(auth), auth.member_id)
        assert order.line_for("B1").amount_value() == Decimal("24.50")

    def test_total_matches_quantities_times_prices(self, coordinator, cart, auth, list_book):
        prices = {"C1": 0.1, "C2": 0.2, "C3": 19.99}
        for isbn, price in prices.items():
            list_book(isbn, price=price)
            cart.add_item(auth.member_id, isbn, 3)

        order = OrderQueries().get_order(coordinator.checkout(auth), auth.member_id)
        expected = sum((Decimal(str(p)) * 3 for p in prices.values()), Decimal("0"))
        assert order.total() == expected
        assert sum(line.amount_value() for line in order.lines) == expected

    def test_very_large_quantity_keeps_exact_amounts(self, coordinator, cart, auth, list_book):
        quantity = 10**15 + 1
        list_book("BX", price=19.99)
        cart.add_item(auth.member_id, "BX", quantity)

        order = OrderQueries().get_order(coordinator.checkout(auth), auth.member_id)
        assert order.line_for("BX").amount_value() == Decimal("19.99") * quantity
        assert order.total() == Decimal("19990000000000019.99")


class TestCheckoutFailures:
    def test_anonymous_caller(self, coordinator):
        with pytest.raises(Unauthenticated):
            coordinator.checkout(AuthContext.anonymous())

    def test_session_for_unknown_member(self, coordinator):
        with pytest.raises(Unauthenticated):
            coordinator.checkout(AuthContext.for_member("ghost"))

    def test_empty_cart(self, coordinator, auth):
        with pytest.raises(EmptyCart):
            coordinator.checkout(auth)
        assert _order_count() == 0

    def test_failed_commit_leaves_cart_and_no_order(self, coordinator, cart, auth, books):
        cart.add_item(auth.member_id, "B1", 2)
        cart.add_item(auth.member_id, "B2", 1)

        with patch.object(OrderRepository, "add", side_effect=RuntimeError("connection reset")):
            with pytest.raises(StoreFailure):
                coordinator.checkout(auth)

        assert _order_count() == 0
        assert [(line.isbn, line.quantity) for line in cart.snapshot(auth.member_id)] == [("B1", 2), ("B2", 1)]

    def test_failed_clear_keeps_the_order(self, coordinator, cart, auth, books):
        cart.add_item(auth.member_id, "B1", 1)

        with patch.object(CartStore, "clear", side_effect=RuntimeError("timeout")):
            attempt = coordinator.attempt(auth)

        assert attempt.succeeded
        assert attempt.stale_cart
        assert attempt.stage is CheckoutStage.COMMITTING
        assert OrderQueries().get_order(attempt.order_id, auth.member_id).line_for("B1").quantity == 1
        # The stale cart is still there for reconciliation
        assert len(cart.snapshot(auth.member_id)) == 1


class TestCheckoutAttempt:
    def test_successful_attempt_reaches_cleared(self, coordinator, cart, auth, books):
        cart.add_item(auth.member_id, "B1", 1)
        attempt = coordinator.attempt(auth)
        assert attempt.succeeded
        assert attempt.stage is CheckoutStage.CLEARED
        assert not attempt.stale_cart

    def test_failed_attempt_records_stage(self, coordinator, auth):
        attempt = coordinator.attempt(auth)
        assert not attempt.succeeded
        assert attempt.stage is CheckoutStage.FAILED
        assert attempt.failed_at is CheckoutStage.SNAPSHOTTING
        assert isinstance(attempt.failure, EmptyCart)

    def test_unauthenticated_attempt_fails_while_validating(self, coordinator):
        attempt = coordinator.attempt(AuthContext.anonymous())
        assert attempt.failed_at is CheckoutStage.VALIDATING


class TestOrderOwnership:
    def test_other_member_cannot_read_order(self, coordinator, cart, auth, books, register_member):
        other_id = register_member(email="bob@example.com")
        cart.add_item(auth.member_id, "B1", 1)
        order_id = coordinator.checkout(auth)

        with pytest.raises(NotFound) as not_owner:
            OrderQueries().get_order(order_id, other_id)
        with pytest.raises(NotFound) as missing:
            OrderQueries().get_order("no-such-order", auth.member_id)
        assert not_owner.value.message == missing.value.message

    def test_each_checkout_gets_a_new_order(self, coordinator, cart, auth, books):
        cart.add_item(auth.member_id, "B1", 1)
        first = coordinator.checkout(auth)
        cart.add_item(auth.member_id, "B2", 1)
        second = coordinator.checkout(auth)

        assert first != second
        assert _order_count() == 2
