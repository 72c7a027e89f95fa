"""Starter catalogue for local development and demos."""

import structlog
from protean.utils.globals import current_domain

from bookstore.catalogue.listing import ListBook
from bookstore.exceptions import AlreadyExists

logger = structlog.get_logger(__name__)

# isbn, title, author, subject, price
STARTER_BOOKS = [
    ("0131103628", "The C Programming Language", "Brian Kernighan", "Computer Science", 45.00),
    ("0201633612", "Design Patterns", "Erich Gamma", "Computer Science", 54.99),
    ("0262033844", "Introduction to Algorithms", "Thomas Cormen", "Computer Science", 89.50),
    ("0596007124", "Head First Design Patterns", "Eric Freeman", "Computer Science", 39.95),
    ("1593279280", "Python Crash Course", "Eric Matthes", "Computer Science", 29.99),
    ("0141439513", "Pride and Prejudice", "Jane Austen", "Fiction", 9.99),
    ("0451524934", "Nineteen Eighty-Four", "George Orwell", "Fiction", 12.50),
    ("0743273565", "The Great Gatsby", "F. Scott Fitzgerald", "Fiction", 10.00),
    ("0061120081", "To Kill a Mockingbird", "Harper Lee", "Fiction", 11.25),
    ("0553380168", "A Brief History of Time", "Stephen Hawking", "Science", 18.00),
    ("0393317552", "The Selfish Gene", "Richard Dawkins", "Science", 16.75),
    ("0465026567", "Godel, Escher, Bach", "Douglas Hofstadter", "Science", 24.00),
    ("0399590501", "Educated", "Tara Westover", "Biography", 15.99),
    ("1501127624", "Steve Jobs", "Walter Isaacson", "Biography", 21.00),
]


def seed_books(books=STARTER_BOOKS) -> int:
    """List every book that is not yet in the catalogue; return how many were added."""
    added = 0
    for isbn, title, author, subject, price in books:
        command = ListBook(isbn=isbn, title=title, author=author, subject=subject, price=price)
        try:
            current_domain.process(command, asynchronous=False)
        except AlreadyExists:
            logger.debug("book_already_listed", isbn=isbn)
            continue
        added += 1
    logger.info("catalogue_seeded", added=added, offered=len(books))
    return added
