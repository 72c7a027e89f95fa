"""Tests for registration field checks."""

import pytest
from bookstore.exceptions import InvalidInput
from bookstore.members.validation import (
    require_text,
    validate_email,
    validate_password,
    validate_postal_code,
)


class TestEmail:
    @pytest.mark.parametrize("email", ["ada@example.com", "a.b+c@mail.co.uk"])
    def test_accepts_well_formed(self, email):
        assert validate_email(email) == email.lower()

    def test_normalises_case_and_whitespace(self):
        assert validate_email("  Ada@Example.COM ") == "ada@example.com"

    @pytest.mark.parametrize("email", ["", "ada", "ada@example", "ada @example.com", "@example.com", None])
    def test_rejects_malformed(self, email):
        with pytest.raises(InvalidInput) as exc:
            validate_email(email)
        assert exc.value.field == "email"


class TestPostalCode:
    def test_accepts_five_digits(self):
        assert validate_postal_code("02139") == "02139"

    def test_accepts_integer(self):
        assert validate_postal_code(10001) == "10001"

    @pytest.mark.parametrize("value", ["1234", "123456", "12a45", "", None])
    def test_rejects_anything_else(self, value):
        with pytest.raises(InvalidInput) as exc:
            validate_postal_code(value)
        assert exc.value.field == "zip"

    @pytest.mark.parametrize("value", ["\u0661\u0662\u0663\u0664\u0665", "\uff11\uff12\uff13\uff14\uff15"])
    def test_rejects_non_ascii_digits(self, value):
        with pytest.raises(InvalidInput):
            validate_postal_code(value)


class TestPassword:
    def test_six_characters_is_enough(self):
        assert validate_password("abcdef") == "abcdef"

    def test_short_password_is_rejected(self):
        with pytest.raises(InvalidInput) as exc:
            validate_password("abcde")
        assert exc.value.field == "password"


class TestRequireText:
    def test_strips_value(self):
        assert require_text("city", "  London ") == "London"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_is_rejected(self, value):
        with pytest.raises(InvalidInput):
            require_text("city", value)
