"""Repository for the Member aggregate."""

from bookstore.domain import bookstore
from bookstore.members.member import Member


@bookstore.repository(part_of=Member)
class MemberRepository:
    def find_by_email(self, email: str) -> Member | None:
        """Find a member by email address, ignoring case."""
        results = self._dao.query.filter(email=email.strip().lower()).all().items
        return results[0] if results else None
