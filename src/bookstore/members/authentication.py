"""Authentication context passed explicitly into every member-scoped operation."""

from dataclasses import dataclass

from bookstore.exceptions import Unauthenticated


@dataclass(frozen=True)
class AuthContext:
    """Resolved identity of the caller, or its explicit absence."""

    member_id: str | None = None
    name: str | None = None

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls()

    @classmethod
    def for_member(cls, member_id: str, name: str | None = None) -> "AuthContext":
        return cls(member_id=str(member_id), name=name)

    @property
    def is_authenticated(self) -> bool:
        return self.member_id is not None

    def require_member(self) -> str:
        if self.member_id is None:
            raise Unauthenticated()
        return self.member_id
