"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String

from bookstore.domain import bookstore


@bookstore.event(part_of="ShoppingCart")
class CartItemAdded:
    """Copies of a book were added to the cart, merged into any existing line."""

    __version__ = 1

    member_id = Identifier(required=True)
    isbn = String(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@bookstore.event(part_of="ShoppingCart")
class CartCleared:
    """Every line was removed from the cart, normally right after checkout."""

    __version__ = 1

    member_id = Identifier(required=True)
    lines_removed = Integer(required=True)
