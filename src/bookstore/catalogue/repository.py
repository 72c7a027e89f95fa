"""Repository for the Book aggregate."""

from collections.abc import Iterator

from bookstore.catalogue.book import Book
from bookstore.domain import bookstore

# Page size used when walking a whole result set
SCAN_BATCH_SIZE = 100


@bookstore.repository(part_of=Book)
class BookRepository:
    """Catalogue queries on top of the standard CRUD operations.

    Subject and title lookups are paginated by the store. Author lookup is a
    case-insensitive prefix match, which is narrowed with ``icontains`` in the
    store and finished in Python.
    """

    def by_subject(self, subject: str, offset: int, limit: int):
        return self._dao.query.filter(subject=subject).order_by("title").offset(offset).limit(limit).all()

    def by_title(self, term: str, offset: int, limit: int):
        return self._dao.query.filter(title__icontains=term).order_by("title").offset(offset).limit(limit).all()

    def by_author_prefix(self, prefix: str) -> list[Book]:
        lowered = prefix.lower()
        candidates = self._scan(self._dao.query.filter(author__icontains=prefix).order_by("title"))
        return [book for book in candidates if book.author.lower().startswith(lowered)]

    def all_books(self) -> Iterator[Book]:
        return self._scan(self._dao.query.order_by("isbn"))

    def _scan(self, queryset) -> Iterator[Book]:
        offset = 0
        while True:
            result = queryset.offset(offset).limit(SCAN_BATCH_SIZE).all()
            yield from result.items
            offset += SCAN_BATCH_SIZE
            if offset >= result.total:
                break
