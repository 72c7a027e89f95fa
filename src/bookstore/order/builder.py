"""Order builder: turns a cart snapshot into an unsaved order."""

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from bookstore.exceptions import EmptyCart
from bookstore.order.order import Order, OrderLine, ShippingAddress
from bookstore.shared.money import line_amount, to_stored


class OrderBuilder:
    """Prices each snapshot line and assembles the order.

    Amounts are ``quantity * unit_price`` in cents, computed with ``Decimal``;
    the order total is the sum of those amounts. Nothing is persisted here.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(UTC))

    def build(self, member_id: str, shipping: dict, lines: Sequence) -> Order:
        if not lines:
            raise EmptyCart(member_id)

        order_lines = [
            OrderLine(
                isbn=line.isbn,
                title=line.title,
                quantity=line.quantity,
                unit_price=to_stored(line.unit_price),
                amount=to_stored(line_amount(line.quantity, line.unit_price)),
            )
            for line in lines
        ]

        return Order.place(
            member_id=member_id,
            shipping_address=ShippingAddress(
                street=shipping["street"],
                city=shipping["city"],
                postal_code=shipping["postal_code"],
            ),
            lines=order_lines,
            placed_at=self._clock(),
        )
