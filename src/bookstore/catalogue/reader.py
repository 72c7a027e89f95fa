"""Catalogue reader: paginated, read-only book search."""

import math
from dataclasses import dataclass, field
from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from bookstore.catalogue.book import Book
from bookstore.exceptions import InvalidInput, NotFound
from bookstore.shared.store import store_operation

DEFAULT_PAGE_SIZE = 5


class SearchCriterion(Enum):
    SUBJECT = "subject"  # exact match
    AUTHOR = "author"  # case-insensitive prefix
    TITLE = "title"  # case-insensitive substring


@dataclass(frozen=True)
class BookPage:
    items: list[Book] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size)


def _positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInput(name, f"{name} must be a positive integer")
    return value


class CatalogueReader:
    """Looks books up by subject, author or title.

    Reads take no locks. Prices returned here may change before checkout; the
    cart snapshot reads the price again at that point.
    """

    def search(self, criterion, term: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> BookPage:
        try:
            criterion = SearchCriterion(criterion)
        except ValueError:
            raise InvalidInput("criterion", f"Unknown search criterion: {criterion!r}") from None
        page = _positive_int("page", page)
        page_size = _positive_int("page_size", page_size)
        term = (term or "").strip()
        if not term:
            raise InvalidInput("term", "Search term must not be empty")

        offset = (page - 1) * page_size

        with store_operation("book lookup"):
            repo = current_domain.repository_for(Book)
            if criterion is SearchCriterion.AUTHOR:
                matches = repo.by_author_prefix(term)
                return BookPage(
                    items=matches[offset : offset + page_size],
                    total=len(matches),
                    page=page,
                    page_size=page_size,
                )

            if criterion is SearchCriterion.SUBJECT:
                result = repo.by_subject(term, offset, page_size)
            else:
                result = repo.by_title(term, offset, page_size)

        return BookPage(items=list(result.items), total=result.total, page=page, page_size=page_size)

    def subjects(self) -> list[str]:
        with store_operation("subject lookup"):
            books = current_domain.repository_for(Book).all_books()
            return sorted({book.subject for book in books})

    def get(self, isbn: str) -> Book:
        with store_operation("book lookup"):
            try:
                return current_domain.repository_for(Book).get(isbn)
            except ObjectNotFoundError:
                raise NotFound("Book", isbn) from None
