"""Order retrieval for the member who placed it."""

from protean.utils.globals import current_domain

from bookstore.exceptions import NotFound
from bookstore.order.order import Order
from bookstore.shared.store import store_operation


class OrderQueries:
    def get_order(self, order_id: str, member_id: str) -> Order:
        """Fetch an order with its lines.

        An order owned by someone else is reported exactly like a missing one.
        """
        with store_operation("order lookup"):
            order = current_domain.repository_for(Order).find_for_member(order_id, member_id)
        if order is None:
            raise NotFound("Order", order_id)
        return order
