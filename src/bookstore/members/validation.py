"""Input checks for member registration and login.

These run before any store access and raise ``InvalidInput`` naming the
offending field.
"""

import re

from bookstore.exceptions import InvalidInput

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
POSTAL_CODE_PATTERN = re.compile(r"[0-9]{5}")
MIN_PASSWORD_LENGTH = 6


def validate_email(email) -> str:
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email.strip()):
        raise InvalidInput("email", "Invalid email format")
    return email.strip().lower()


def validate_postal_code(postal_code) -> str:
    value = str(postal_code).strip() if postal_code is not None else ""
    if not POSTAL_CODE_PATTERN.fullmatch(value):
        raise InvalidInput("zip", "Zip code must be 5 digits")
    return value


def validate_password(password) -> str:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return password


def require_text(field: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(field, f"{field} is required")
    return value.strip()
