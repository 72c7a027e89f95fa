"""Concurrent cart and checkout operations for one member."""

import threading

import pytest
from bookstore.cart.locking import MemberLocks, member_locks
from bookstore.cart.store import CartStore
from bookstore.checkout.coordinator import CheckoutCoordinator
from bookstore.domain import bookstore
from bookstore.members.authentication import AuthContext
from bookstore.order.queries import OrderQueries


@pytest.fixture()
def run_in_domain():
    """Start a thread running ``target`` inside its own domain context."""
    started, failures = [], []

    def _start(target, *args):
        def _body():
            with bookstore.domain_context():
                try:
                    target(*args)
                except Exception as exc:
                    failures.append(exc)

        thread = threading.Thread(target=_body, daemon=True)
        thread.start()
        started.append(thread)
        return thread

    yield _start

    for thread in started:
        thread.join(timeout=5)
    assert failures == []


class TestMemberLocks:
    def test_lock_is_released_after_use(self):
        locks = MemberLocks()
        with locks.hold("m1"):
            assert "m1" in locks
        assert "m1" not in locks
        assert len(locks) == 0

    def test_nested_holds_share_one_lock(self):
        locks = MemberLocks()
        with locks.hold("m1"):
            with locks.hold("m1"):
                assert len(locks) == 1
            assert "m1" in locks
        assert len(locks) == 0

    def test_registry_does_not_grow_with_members_seen(self):
        locks = MemberLocks()
        for number in range(100):
            with locks.hold(f"member-{number}"):
                pass
        assert len(locks) == 0

    def test_waiting_thread_keeps_the_lock_alive(self):
        locks = MemberLocks()
        entered = threading.Event()

        def _wait_for_lock():
            with locks.hold("m1"):
                entered.set()

        with locks.hold("m1"):
            waiter = threading.Thread(target=_wait_for_lock, daemon=True)
            waiter.start()
            assert not entered.wait(timeout=0.2)

        waiter.join(timeout=5)
        assert entered.is_set()
        assert len(locks) == 0

    def test_other_members_do_not_wait(self):
        locks = MemberLocks()
        entered = threading.Event()

        def _hold_other():
            with locks.hold("m2"):
                entered.set()

        with locks.hold("m1"):
            other = threading.Thread(target=_hold_other, daemon=True)
            other.start()
            assert entered.wait(timeout=5)
        other.join(timeout=5)


class TestConcurrentCart:
    def test_parallel_adds_lose_no_copies(self, member_id, books, run_in_domain):
        store = CartStore()
        threads = [run_in_domain(store.add_item, member_id, "B1", 1) for _ in range(8)]
        for thread in threads:
            thread.join(timeout=10)

        [line] = store.snapshot(member_id)
        assert line.quantity == 8

    def test_add_waits_for_checkout_and_lands_in_the_next_cart(self, member_id, books, run_in_domain):
        store = CartStore()
        store.add_item(member_id, "B1", 2)
        auth = AuthContext.for_member(member_id, name="Ada")

        with member_locks.hold(member_id):
            adder = run_in_domain(store.add_item, member_id, "B2", 1)
            adder.join(timeout=0.2)
            assert adder.is_alive()

            order_id = CheckoutCoordinator(cart_store=store).checkout(auth)

        adder.join(timeout=10)
        assert not adder.is_alive()

        order = OrderQueries().get_order(order_id, member_id)
        assert [(line.isbn, line.quantity) for line in order.lines] == [("B1", 2)]
        assert [(line.isbn, line.quantity) for line in store.snapshot(member_id)] == [("B2", 1)]
