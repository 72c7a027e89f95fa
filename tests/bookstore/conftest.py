import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def bookstore_bed():
    from bookstore.domain import bookstore

    bed = DomainFixture(bookstore)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(bookstore_bed):
    with bookstore_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Data helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def list_book():
    """Return a helper that lists a book through the ListBook command."""
    from bookstore.catalogue.listing import ListBook

    def _list(isbn, title="A Book", author="Some Author", subject="Fiction", price=10.0):
        return current_domain.process(
            ListBook(isbn=isbn, title=title, author=author, subject=subject, price=price),
            asynchronous=False,
        )

    return _list


@pytest.fixture()
def books(list_book):
    """Two books used across the cart and checkout tests: B1 at 10.00 and B2 at 5.50."""
    list_book("B1", title="Book One", author="Alice Walker", subject="Fiction", price=10.00)
    list_book("B2", title="Book Two", author="Bob Dylan", subject="Music", price=5.50)
    return ["B1", "B2"]


@pytest.fixture()
def register_member():
    """Return a helper that registers a member and returns the member id."""
    from bookstore.members.registry import MemberRegistry

    def _register(email="ada@example.com", password="secret1", **overrides):
        fields = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "street": "12 Analytical Way",
            "city": "London",
            "postal_code": "10001",
            "phone": "555-0100",
        }
        fields.update(overrides)
        return MemberRegistry().register(email=email, password=password, **fields)

    return _register


@pytest.fixture()
def member_id(register_member):
    return register_member()
