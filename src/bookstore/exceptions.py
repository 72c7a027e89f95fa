"""Error taxonomy for the bookstore.

Every error carries a ``kind`` so that callers can tell client-fixable input
problems from transient backend problems without matching on message text.
The HTTP layer maps each kind to a status code in ``bookstore.api.errors``.
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    UNAUTHENTICATED = "unauthenticated"
    INVALID_INPUT = "invalid_input"
    EMPTY_CART = "empty_cart"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORE_FAILURE = "store_failure"


class BookstoreError(Exception):
    """Base exception for all bookstore errors."""

    kind: ErrorKind = ErrorKind.STORE_FAILURE

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}


class Unauthenticated(BookstoreError):
    """No member is attached to the request."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "Not logged in"):
        super().__init__(message)


class InvalidInput(BookstoreError):
    """Malformed input, rejected before any store access."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, field: str, message: str):
        super().__init__(message, details={"field": field})
        self.field = field


class InvalidQuantity(InvalidInput):
    def __init__(self, quantity: Any):
        super().__init__("qty", "Quantity must be at least 1")
        self.details["quantity"] = quantity


class EmptyCart(BookstoreError):
    kind = ErrorKind.EMPTY_CART

    def __init__(self, member_id: str):
        super().__init__("Cart is empty", details={"member_id": member_id})


class NotFound(BookstoreError):
    """Raised for absent records, and for orders the caller does not own."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found", details={"resource": resource, "id": identifier})


class AlreadyExists(BookstoreError):
    kind = ErrorKind.CONFLICT

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        super().__init__(
            message or f"{resource} already exists",
            details={"resource": resource, "id": identifier},
        )


class DuplicateEmail(AlreadyExists):
    def __init__(self, email: str):
        super().__init__("Member", email, message="Email already exists")


class StoreFailure(BookstoreError):
    """The persistent store failed: timeouts, aborted transactions, driver errors."""

    kind = ErrorKind.STORE_FAILURE

    def __init__(self, operation: str, reason: str | None = None):
        message = f"{operation} failed"
        super().__init__(message, details={"operation": operation, "reason": reason})
