"""Order aggregate: the permanent record of a completed purchase.

An order and its lines are written once, together, and never modified. The
shipping address and every price are copies taken at checkout, so later
changes to the member or the catalogue leave historical orders untouched.
"""

from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, HasMany, Identifier, Integer, String, ValueObject

from bookstore.domain import bookstore
from bookstore.order.events import OrderPlaced
from bookstore.shared.money import line_amount, to_money, to_stored, total_of


@bookstore.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, as registered by the member at checkout time."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=5)


@bookstore.entity(part_of="Order")
class OrderLine:
    """One book's quantity and amount within an order."""

    isbn = String(required=True, max_length=20)
    title = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    # Decimal strings, exact for any quantity
    unit_price = String(required=True, max_length=64)
    amount = String(required=True, max_length=128)

    @invariant.post
    def amount_must_be_quantity_times_unit_price(self):
        if line_amount(self.quantity, self.unit_price) != to_money(self.amount):
            raise ValidationError({"amount": ["Line amount must equal quantity times unit price"]})

    def amount_value(self) -> Decimal:
        return to_money(self.amount)


@bookstore.aggregate
class Order:
    member_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    shipping_address = ValueObject(ShippingAddress, required=True)
    created_on = Date(required=True)
    placed_at = DateTime(required=True)

    @classmethod
    def place(cls, member_id, shipping_address, lines, placed_at):
        """Assemble a new order from fully priced lines."""
        order = cls(
            member_id=member_id,
            shipping_address=shipping_address,
            lines=lines,
            created_on=placed_at.date(),
            placed_at=placed_at,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                member_id=str(member_id),
                line_count=len(lines),
                total=to_stored(order.total()),
                placed_at=placed_at,
            )
        )
        return order

    def total(self) -> Decimal:
        return total_of(line.amount for line in self.lines)

    def line_for(self, isbn):
        return next((line for line in self.lines if line.isbn == isbn), None)
