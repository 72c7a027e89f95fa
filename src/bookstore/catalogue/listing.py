"""Catalogue listing: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String
from protean.utils.globals import current_domain

from bookstore.catalogue.book import Book
from bookstore.domain import bookstore
from bookstore.exceptions import AlreadyExists


@bookstore.command(part_of="Book")
class ListBook:
    """Add a new title to the catalogue."""

    isbn: String(required=True, max_length=20)
    title: String(required=True, max_length=255)
    author: String(required=True, max_length=255)
    subject: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)


@bookstore.command_handler(part_of=Book)
class ListBookHandler:
    @handle(ListBook)
    def list_book(self, command):
        repo = current_domain.repository_for(Book)
        try:
            repo.get(command.isbn)
        except ObjectNotFoundError:
            pass
        else:
            raise AlreadyExists("Book", command.isbn)

        book = Book.create(
            isbn=command.isbn,
            title=command.title,
            author=command.author,
            subject=command.subject,
            price=command.price,
        )
        repo.add(book)
        return book.isbn
