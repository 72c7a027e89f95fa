"""Pydantic request/response schemas for the bookstore API.

These are external contracts, kept separate from internal Protean commands.
Monetary amounts are serialised as strings with two decimal places.
"""

from pydantic import BaseModel, Field

from bookstore.shared.money import format_money


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    fname: str
    lname: str
    address: str
    city: str
    zip: str | int
    phone: str | None = None
    email: str
    password: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "fname": "Ada",
                    "lname": "Lovelace",
                    "address": "12 Analytical Way",
                    "city": "London",
                    "zip": "10001",
                    "phone": "555-0100",
                    "email": "ada@example.com",
                    "password": "engines",
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    success: bool = True
    name: str


class UserResponse(BaseModel):
    logged_in: bool
    name: str | None = None
    member_id: str | None = None


class StatusResponse(BaseModel):
    success: bool = True
    message: str | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class BookResponse(BaseModel):
    isbn: str
    title: str
    author: str
    subject: str
    price: str

    @classmethod
    def from_book(cls, book) -> "BookResponse":
        return cls(
            isbn=book.isbn,
            title=book.title,
            author=book.author,
            subject=book.subject,
            price=format_money(book.price),
        )


class BookPageResponse(BaseModel):
    books: list[BookResponse]
    total: int
    page: int
    total_pages: int

    @classmethod
    def from_page(cls, page) -> "BookPageResponse":
        return cls(
            books=[BookResponse.from_book(book) for book in page.items],
            total=page.total,
            page=page.page,
            total_pages=page.total_pages,
        )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    isbn: str = Field(min_length=1, max_length=20)
    # Range checked by CartStore.add_item
    qty: int


class CartLineResponse(BaseModel):
    isbn: str
    title: str
    qty: int
    price: str
    total: str

    @classmethod
    def from_snapshot(cls, line) -> "CartLineResponse":
        return cls(
            isbn=line.isbn,
            title=line.title,
            qty=line.quantity,
            price=format_money(line.unit_price),
            total=format_money(line.total),
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    success: bool = True
    order_id: str


class ShippingAddressSchema(BaseModel):
    street: str
    city: str
    postal_code: str


class OrderLineResponse(BaseModel):
    isbn: str
    title: str
    qty: int
    unit_price: str
    amount: str


class OrderResponse(BaseModel):
    order_id: str
    member_id: str
    fname: str | None = None
    lname: str | None = None
    created: str
    shipping: ShippingAddressSchema
    total: str
    details: list[OrderLineResponse]

    @classmethod
    def from_order(cls, order, member=None) -> "OrderResponse":
        return cls(
            order_id=str(order.id),
            member_id=str(order.member_id),
            fname=member.first_name if member else None,
            lname=member.last_name if member else None,
            created=order.created_on.isoformat(),
            shipping=ShippingAddressSchema(
                street=order.shipping_address.street,
                city=order.shipping_address.city,
                postal_code=order.shipping_address.postal_code,
            ),
            total=format_money(order.total()),
            details=[
                OrderLineResponse(
                    isbn=line.isbn,
                    title=line.title,
                    qty=line.quantity,
                    unit_price=format_money(line.unit_price),
                    amount=format_money(line.amount),
                )
                for line in sorted(order.lines, key=lambda line: line.isbn)
            ],
        )
