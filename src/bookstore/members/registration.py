"""Member registration: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from bookstore.domain import bookstore
from bookstore.exceptions import DuplicateEmail
from bookstore.members.member import Member


@bookstore.command(part_of="Member")
class RegisterMember:
    """Create a member account. Carries the password hash, never the password."""

    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=5)
    phone: String(max_length=20)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)


@bookstore.command_handler(part_of=Member)
class RegisterMemberHandler:
    @handle(RegisterMember)
    def register_member(self, command):
        repo = current_domain.repository_for(Member)
        if repo.find_by_email(command.email) is not None:
            raise DuplicateEmail(command.email)

        member = Member.register(
            first_name=command.first_name,
            last_name=command.last_name,
            street=command.street,
            city=command.city,
            postal_code=command.postal_code,
            phone=command.phone,
            email=command.email,
            password_hash=command.password_hash,
        )
        repo.add(member)
        return str(member.id)
