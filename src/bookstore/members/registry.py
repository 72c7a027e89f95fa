"""Member registry: registration and credential checks."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from werkzeug.security import generate_password_hash

from bookstore.exceptions import NotFound, Unauthenticated
from bookstore.members.member import Member
from bookstore.members.registration import RegisterMember
from bookstore.members.validation import (
    require_text,
    validate_email,
    validate_password,
    validate_postal_code,
)
from bookstore.shared.store import store_operation

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class MemberRegistry:
    def register(self, first_name, last_name, street, city, postal_code, email, password, phone=None) -> str:
        """Validate the form, hash the password and create the member.

        Returns the new member id. Raises ``InvalidInput`` for malformed
        fields and ``DuplicateEmail`` when the address is already taken.
        """
        email = validate_email(email)
        postal_code = validate_postal_code(postal_code)
        validate_password(password)
        command = RegisterMember(
            first_name=require_text("fname", first_name),
            last_name=require_text("lname", last_name),
            street=require_text("address", street),
            city=require_text("city", city),
            postal_code=postal_code,
            phone=phone,
            email=email,
            password_hash=generate_password_hash(password),
        )

        with store_operation("registration"):
            member_id = current_domain.process(command, asynchronous=False)

        logger.info("member_registered", member_id=member_id)
        return member_id

    def authenticate(self, email, password) -> Member:
        """Return the member for a matching email and password.

        Unknown email and wrong password fail with the same message.
        """
        email = validate_email(email)
        with store_operation("login"):
            member = current_domain.repository_for(Member).find_by_email(email)

        if member is None or not isinstance(password, str) or not member.check_password(password):
            logger.info("login_failed", email=email)
            raise Unauthenticated(INVALID_CREDENTIALS)
        return member

    def get(self, member_id: str) -> Member:
        with store_operation("member lookup"):
            try:
                return current_domain.repository_for(Member).get(member_id)
            except ObjectNotFoundError:
                raise NotFound("Member", member_id) from None
