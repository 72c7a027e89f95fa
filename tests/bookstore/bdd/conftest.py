"""Shared BDD fixtures and step definitions for the bookstore."""

import pytest
from bookstore.catalogue.listing import ListBook
from bookstore.exceptions import BookstoreError
from bookstore.members.registry import MemberRegistry
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured bookstore errors."""
    return {"exc": None}


@pytest.fixture()
def capture(error):
    """Run a callable, storing a raised ``BookstoreError`` instead of propagating it."""

    def _capture(fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except BookstoreError as exc:
            error["exc"] = exc
            return None

    return _capture


@pytest.fixture()
def register_visitor():
    def _register(email, postal_code="10001"):
        return MemberRegistry().register(
            first_name="Ada",
            last_name="Lovelace",
            street="12 Analytical Way",
            city="London",
            postal_code=postal_code,
            email=email,
            password="secret1",
        )

    return _register


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue lists "{isbn}" priced {price:f}'))
def catalogue_lists(isbn, price):
    current_domain.process(
        ListBook(isbn=isbn, title=f"Title {isbn}", author="Some Author", subject="Fiction", price=price),
        asynchronous=False,
    )


@given("a registered member", target_fixture="member_id")
def registered_member(register_visitor):
    return register_visitor("member@example.com")


@given(parsers.cfparse('a visitor registered with email "{email}"'))
def visitor_registered(register_visitor, email):
    register_visitor(email)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the add fails with "{kind}"'))
@then(parsers.cfparse('checkout fails with "{kind}"'))
@then(parsers.cfparse('registration fails with "{kind}"'))
def fails_with(error, kind):
    assert error["exc"] is not None
    assert error["exc"].kind.value == kind
