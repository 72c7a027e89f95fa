"""Domain events for the Book aggregate."""

from protean.fields import Float, String

from bookstore.domain import bookstore


@bookstore.event(part_of="Book")
class BookListed:
    """A book was added to the catalogue."""

    __version__ = 1

    isbn: String(required=True)
    title: String(required=True)
    author: String(required=True)
    subject: String(required=True)
    price: Float(required=True)
