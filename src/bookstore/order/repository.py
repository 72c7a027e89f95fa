"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from bookstore.domain import bookstore
from bookstore.order.order import Order


@bookstore.repository(part_of=Order)
class OrderRepository:
    def find_for_member(self, order_id: str, member_id: str) -> Order | None:
        """Return the order only if ``member_id`` placed it."""
        try:
            order = self.get(order_id)
        except ObjectNotFoundError:
            return None
        return order if str(order.member_id) == str(member_id) else None
