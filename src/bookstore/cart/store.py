"""Cart store: the member-facing operations on a shopping cart."""

from dataclasses import dataclass
from decimal import Decimal

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from bookstore.cart.cart import ShoppingCart, validate_quantity
from bookstore.cart.items import AddToCart, ClearCart
from bookstore.cart.locking import MemberLocks, member_locks
from bookstore.catalogue.book import Book
from bookstore.shared.money import line_amount
from bookstore.shared.store import store_operation

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartLineSnapshot:
    """One cart line joined with the catalogue at the moment it was read."""

    isbn: str
    title: str
    quantity: int
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return line_amount(self.quantity, self.unit_price)


class CartStore:
    def __init__(self, locks: MemberLocks = member_locks):
        self._locks = locks

    def add_item(self, member_id: str, isbn: str, quantity) -> int:
        """Add ``quantity`` copies of ``isbn``, merging with an existing line.

        Returns the line's quantity after the merge.
        """
        validate_quantity(quantity)

        with self._locks.hold(member_id), store_operation("add to cart"):
            line_quantity = current_domain.process(
                AddToCart(member_id=member_id, isbn=isbn, quantity=quantity),
                asynchronous=False,
            )

        logger.info("cart_item_added", member_id=member_id, isbn=isbn, quantity=quantity, line_quantity=line_quantity)
        return line_quantity

    def snapshot(self, member_id: str) -> list[CartLineSnapshot]:
        """Read the cart with current catalogue prices.

        Lines whose book has left the catalogue are dropped from the snapshot.
        """
        with self._locks.hold(member_id), store_operation("cart lookup"):
            try:
                cart = current_domain.repository_for(ShoppingCart).get(member_id)
            except ObjectNotFoundError:
                return []

            books = current_domain.repository_for(Book)
            lines = []
            for item in sorted(cart.items, key=lambda i: i.isbn):
                try:
                    book = books.get(item.isbn)
                except ObjectNotFoundError:
                    logger.warning("cart_line_without_book", member_id=member_id, isbn=item.isbn)
                    continue
                lines.append(
                    CartLineSnapshot(
                        isbn=book.isbn,
                        title=book.title,
                        quantity=item.quantity,
                        unit_price=book.unit_price(),
                    )
                )
            return lines

    def clear(self, member_id: str) -> int:
        with self._locks.hold(member_id), store_operation("cart clear"):
            removed = current_domain.process(ClearCart(member_id=member_id), asynchronous=False)

        logger.info("cart_cleared", member_id=member_id, lines_removed=removed)
        return removed
