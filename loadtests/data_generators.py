"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the registration checks (email
format, five-digit zip, six-character password) and match the field names
expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

# Search terms that hit the starter catalogue loaded by `manage.py seed-books`
SUBJECTS = ["Computer Science", "Fiction", "Science", "Biography"]
TITLE_TERMS = ["design", "the", "history", "python", "pride"]
AUTHOR_PREFIXES = ["er", "ja", "ge", "st", "t"]


def valid_email() -> str:
    """Generate a unique email so concurrent users never collide on registration."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:6]}@{domain}"


def valid_zip() -> str:
    return f"{random.randint(0, 99999):05d}"


def registration_data() -> dict:
    """Generate a registration payload; the password is returned in the payload for login."""
    return {
        "fname": fake.first_name()[:50],
        "lname": fake.last_name()[:50],
        "address": fake.street_address()[:100],
        "city": fake.city()[:50],
        "zip": valid_zip(),
        "phone": fake.numerify("###-###-####"),
        "email": valid_email(),
        "password": fake.password(length=10),
    }


def cart_quantity() -> int:
    """Mostly single copies, occasionally a few."""
    return random.choices([1, 2, 3], weights=[70, 20, 10])[0]


def search_criterion() -> tuple[str, str]:
    criterion = random.choice(["subject", "title", "author"])
    if criterion == "subject":
        return criterion, random.choice(SUBJECTS)
    if criterion == "title":
        return criterion, random.choice(TITLE_TERMS)
    return criterion, random.choice(AUTHOR_PREFIXES)
