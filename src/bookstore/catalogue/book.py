"""Book aggregate: one catalogue entry, keyed by ISBN."""

from datetime import UTC, datetime
from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String

from bookstore.catalogue.events import BookListed
from bookstore.domain import bookstore
from bookstore.shared.money import to_money


@bookstore.aggregate
class Book:
    """A title offered for sale.

    The catalogue is read-only from the ordering side: carts reference books by
    ISBN and orders copy the title and price they were bought at.
    """

    isbn: String(identifier=True, required=True, max_length=20)
    title: String(required=True, max_length=255)
    author: String(required=True, max_length=255)
    subject: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    listed_at: DateTime()

    @invariant.post
    def price_must_be_whole_cents(self):
        if self.price is not None and round(self.price, 2) != self.price:
            raise ValidationError({"price": ["Price must have at most two decimal places"]})

    @classmethod
    def create(cls, isbn, title, author, subject, price):
        book = cls(
            isbn=isbn,
            title=title,
            author=author,
            subject=subject,
            price=float(to_money(price)),
            listed_at=datetime.now(UTC),
        )
        book.raise_(
            BookListed(
                isbn=book.isbn,
                title=book.title,
                author=book.author,
                subject=book.subject,
                price=book.price,
            )
        )
        return book

    def unit_price(self) -> Decimal:
        return to_money(self.price)
