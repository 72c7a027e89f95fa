"""Shopping cart aggregate: one per member, one line per book.

Carts store ISBNs and quantities only. Prices are read from the catalogue
when the cart is displayed or checked out.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from bookstore.cart.events import CartCleared, CartItemAdded
from bookstore.domain import bookstore
from bookstore.exceptions import InvalidQuantity


def validate_quantity(quantity) -> int:
    """Quantities are whole numbers of at least one copy."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity(quantity)
    return quantity


@bookstore.entity(part_of="ShoppingCart")
class CartItem:
    isbn = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@bookstore.aggregate
class ShoppingCart:
    member_id = Identifier(identifier=True, required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_book(self):
        isbns = [item.isbn for item in self.items]
        if len(isbns) != len(set(isbns)):
            raise ValidationError({"items": ["A book may appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, member_id):
        now = datetime.now(UTC)
        return cls(member_id=member_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def line_for(self, isbn):
        return next((item for item in self.items if item.isbn == isbn), None)

    def add_item(self, isbn, quantity):
        """Add copies of a book, increasing the quantity if the book is already in the cart."""
        validate_quantity(quantity)

        existing = self.line_for(isbn)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(isbn=isbn, quantity=quantity, added_at=now))
            line_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                member_id=str(self.member_id),
                isbn=isbn,
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )
        return line_quantity

    def clear(self):
        """Remove every line. Clearing an empty cart changes nothing."""
        removed = len(self.items)
        if not removed:
            return 0

        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(member_id=str(self.member_id), lines_removed=removed))
        return removed
