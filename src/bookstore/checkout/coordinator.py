"""Checkout coordinator: converts a member's cart into an order.

Flow:
    1. Validating: the auth context must name an existing member
    2. Snapshotting: read the cart with current prices; empty cart stops here
    3. Building: price the lines and assemble the order in memory
    4. Committing: persist the order and all its lines in one unit of work
    5. Cleared: empty the cart

Any failure up to and including Committing leaves the cart as it was and no
order behind. Once the commit has succeeded the order stands: a failure to
clear the cart is logged as a stale cart for reconciliation and the checkout
still succeeds. Nothing is retried here, since a blind retry could place the
same order twice.
"""

from dataclasses import dataclass
from enum import Enum

import structlog
from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from bookstore.cart.locking import MemberLocks, member_locks
from bookstore.cart.store import CartStore
from bookstore.exceptions import BookstoreError, EmptyCart, Unauthenticated
from bookstore.members.authentication import AuthContext
from bookstore.members.member import Member
from bookstore.order.builder import OrderBuilder
from bookstore.order.order import Order
from bookstore.shared.store import store_operation

logger = structlog.get_logger(__name__)


class CheckoutStage(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SNAPSHOTTING = "snapshotting"
    BUILDING = "building"
    COMMITTING = "committing"
    CLEARED = "cleared"
    FAILED = "failed"


@dataclass
class CheckoutAttempt:
    """Outcome of one checkout attempt.

    ``failure`` is set (and ``stage`` is ``FAILED``) when the attempt was
    aborted; ``failed_at`` records the stage it was aborted in. ``stale_cart``
    is set when the order was committed but the cart could not be cleared.
    """

    member_id: str | None = None
    stage: CheckoutStage = CheckoutStage.IDLE
    order_id: str | None = None
    failure: BookstoreError | None = None
    failed_at: CheckoutStage | None = None
    stale_cart: bool = False

    @property
    def succeeded(self) -> bool:
        return self.order_id is not None and self.failure is None

    def advance(self, stage: CheckoutStage) -> None:
        self.stage = stage
        logger.debug("checkout_stage", member_id=self.member_id, stage=stage.value)

    def fail(self, error: BookstoreError) -> None:
        self.failed_at = self.stage
        self.failure = error
        self.stage = CheckoutStage.FAILED
        logger.warning(
            "checkout_failed",
            member_id=self.member_id,
            failed_at=self.failed_at.value,
            kind=error.kind.value,
            reason=error.message,
        )


class CheckoutCoordinator:
    def __init__(
        self,
        cart_store: CartStore | None = None,
        builder: OrderBuilder | None = None,
        locks: MemberLocks = member_locks,
    ):
        self._locks = locks
        self._cart_store = cart_store or CartStore(locks=locks)
        self._builder = builder or OrderBuilder()

    def checkout(self, auth: AuthContext) -> str:
        """Place an order from the caller's cart and return its id.

        Raises the error that aborted the attempt.
        """
        attempt = self.attempt(auth)
        if attempt.failure is not None:
            raise attempt.failure
        return attempt.order_id

    def attempt(self, auth: AuthContext) -> CheckoutAttempt:
        """Run one checkout attempt, reporting failure in the returned record."""
        attempt = CheckoutAttempt(member_id=auth.member_id)
        try:
            self._run(attempt, auth)
        except BookstoreError as exc:
            attempt.fail(exc)
        return attempt

    def _run(self, attempt: CheckoutAttempt, auth: AuthContext) -> None:
        attempt.advance(CheckoutStage.VALIDATING)
        member_id = auth.require_member()
        member = self._load_member(member_id)

        with self._locks.hold(member_id):
            attempt.advance(CheckoutStage.SNAPSHOTTING)
            lines = self._cart_store.snapshot(member_id)
            if not lines:
                raise EmptyCart(member_id)

            attempt.advance(CheckoutStage.BUILDING)
            order = self._builder.build(member_id, member.shipping_address(), lines)

            attempt.advance(CheckoutStage.COMMITTING)
            self._commit(order)
            attempt.order_id = str(order.id)
            logger.info(
                "order_placed",
                member_id=member_id,
                order_id=attempt.order_id,
                line_count=len(order.lines),
                total=str(order.total()),
            )

            if self._clear_cart(member_id, attempt.order_id):
                attempt.advance(CheckoutStage.CLEARED)
            else:
                attempt.stale_cart = True

    def _load_member(self, member_id: str) -> Member:
        with store_operation("member lookup"):
            try:
                return current_domain.repository_for(Member).get(member_id)
            except ObjectNotFoundError:
                # A session naming a member that no longer exists is not a valid session
                raise Unauthenticated() from None

    def _commit(self, order: Order) -> None:
        with store_operation("checkout"):
            with UnitOfWork():
                current_domain.repository_for(Order).add(order)

    def _clear_cart(self, member_id: str, order_id: str) -> bool:
        try:
            self._cart_store.clear(member_id)
        except Exception:
            logger.exception("stale_cart_after_checkout", member_id=member_id, order_id=order_id)
            return False
        return True
