"""Member aggregate: a registered customer of the store."""

from datetime import UTC, datetime

from protean.fields import DateTime, String
from werkzeug.security import check_password_hash

from bookstore.domain import bookstore
from bookstore.members.events import MemberRegistered


@bookstore.aggregate
class Member:
    """A person who can log in, fill a cart and place orders.

    The street, city and postal code are copied onto every order at checkout;
    orders never read them back from the member.
    """

    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=5)
    phone: String(max_length=20)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    registered_at: DateTime()

    @classmethod
    def register(cls, first_name, last_name, street, city, postal_code, email, password_hash, phone=None):
        now = datetime.now(UTC)
        member = cls(
            first_name=first_name,
            last_name=last_name,
            street=street,
            city=city,
            postal_code=postal_code,
            phone=phone,
            email=email,
            password_hash=password_hash,
            registered_at=now,
        )
        member.raise_(
            MemberRegistered(
                member_id=str(member.id),
                email=member.email,
                first_name=member.first_name,
                last_name=member.last_name,
                registered_at=now,
            )
        )
        return member

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def shipping_address(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "postal_code": self.postal_code,
        }
