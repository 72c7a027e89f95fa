"""Bookstore database management CLI.

Provides commands to create and drop the database schema and to load the
starter catalogue.

Usage:
    python src/manage.py setup-db     # Create all tables
    python src/manage.py drop-db      # Drop all tables
    python src/manage.py seed-books   # List the starter catalogue
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the bookstore domain."""
    from bookstore.domain import bookstore
    from bookstore.utils.db import setup_db

    print("Initializing bookstore domain...")
    bookstore.init()
    print("Creating bookstore database schema...")
    setup_db(bookstore)
    print("Done.")


def drop_database():
    """Drop the database schema for the bookstore domain."""
    from bookstore.domain import bookstore
    from bookstore.utils.db import drop_db

    print("Initializing bookstore domain...")
    bookstore.init()
    print("Dropping bookstore database schema...")
    drop_db(bookstore)
    print("Done.")


def seed_catalogue():
    """List the starter books that are not yet in the catalogue."""
    from bookstore.catalogue.seed import seed_books
    from bookstore.domain import bookstore

    print("Initializing bookstore domain...")
    bookstore.init()
    with bookstore.domain_context():
        added = seed_books()
    print(f"  {added} book(s) listed.")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Bookstore database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-books", help="Load the starter catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-books":
        seed_catalogue()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
