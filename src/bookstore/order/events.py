"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from bookstore.domain import bookstore


@bookstore.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    member_id = Identifier(required=True)
    line_count = Integer(required=True)
    total = String(required=True, max_length=128)
    placed_at = DateTime(required=True)
