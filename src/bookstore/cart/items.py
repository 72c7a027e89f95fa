"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from bookstore.cart.cart import ShoppingCart
from bookstore.catalogue.book import Book
from bookstore.domain import bookstore
from bookstore.exceptions import NotFound


@bookstore.command(part_of="ShoppingCart")
class AddToCart:
    member_id = Identifier(required=True)
    isbn = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)


@bookstore.command(part_of="ShoppingCart")
class ClearCart:
    member_id = Identifier(required=True)


def _load_cart(repo, member_id):
    try:
        return repo.get(member_id)
    except ObjectNotFoundError:
        return None


@bookstore.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        try:
            current_domain.repository_for(Book).get(command.isbn)
        except ObjectNotFoundError:
            raise NotFound("Book", command.isbn) from None

        repo = current_domain.repository_for(ShoppingCart)
        cart = _load_cart(repo, command.member_id) or ShoppingCart.create(member_id=command.member_id)
        line_quantity = cart.add_item(isbn=command.isbn, quantity=command.quantity)
        repo.add(cart)
        return line_quantity

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _load_cart(repo, command.member_id)
        if cart is None:
            return 0

        removed = cart.clear()
        if removed:
            repo.add(cart)
        return removed
