"""FastAPI routes for the bookstore: members, catalogue, cart and orders."""

from fastapi import APIRouter, Depends, Request

from bookstore.api.auth import current_auth, end_session, start_session
from bookstore.api.schemas import (
    AddToCartRequest,
    BookPageResponse,
    CartLineResponse,
    LoginRequest,
    LoginResponse,
    OrderIdResponse,
    OrderResponse,
    RegisterRequest,
    StatusResponse,
    UserResponse,
)
from bookstore.cart.store import CartStore
from bookstore.catalogue.reader import DEFAULT_PAGE_SIZE, CatalogueReader
from bookstore.checkout.coordinator import CheckoutCoordinator
from bookstore.members.authentication import AuthContext
from bookstore.members.registry import MemberRegistry
from bookstore.order.queries import OrderQueries

# ---------------------------------------------------------------------------
# Member Router
# ---------------------------------------------------------------------------
member_router = APIRouter(prefix="/api", tags=["members"])


@member_router.post("/register", status_code=201, response_model=StatusResponse)
async def register(body: RegisterRequest) -> StatusResponse:
    MemberRegistry().register(
        first_name=body.fname,
        last_name=body.lname,
        street=body.address,
        city=body.city,
        postal_code=body.zip,
        email=body.email,
        password=body.password,
        phone=body.phone,
    )
    return StatusResponse(message="Registration successful")


@member_router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, request: Request) -> LoginResponse:
    member = MemberRegistry().authenticate(body.email, body.password)
    start_session(request, member)
    return LoginResponse(name=member.first_name)


@member_router.get("/user", response_model=UserResponse)
async def current_user(auth: AuthContext = Depends(current_auth)) -> UserResponse:
    if not auth.is_authenticated:
        return UserResponse(logged_in=False)
    return UserResponse(logged_in=True, name=auth.name, member_id=auth.member_id)


@member_router.post("/logout", response_model=StatusResponse)
async def logout(request: Request) -> StatusResponse:
    end_session(request)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Catalogue Router
# ---------------------------------------------------------------------------
catalogue_router = APIRouter(prefix="/api", tags=["catalogue"])


@catalogue_router.get("/subjects", response_model=list[str])
async def list_subjects() -> list[str]:
    return CatalogueReader().subjects()


@catalogue_router.get("/books/{criterion}/{term}", response_model=BookPageResponse)
async def search_books(criterion: str, term: str, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> BookPageResponse:
    result = CatalogueReader().search(criterion, term, page=page, page_size=limit)
    return BookPageResponse.from_page(result)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api", tags=["cart"])


@cart_router.post("/cart", response_model=StatusResponse)
async def add_to_cart(body: AddToCartRequest, auth: AuthContext = Depends(current_auth)) -> StatusResponse:
    member_id = auth.require_member()
    CartStore().add_item(member_id, body.isbn, body.qty)
    return StatusResponse(message="Added to cart")


@cart_router.get("/cart", response_model=list[CartLineResponse])
async def view_cart(auth: AuthContext = Depends(current_auth)) -> list[CartLineResponse]:
    member_id = auth.require_member()
    return [CartLineResponse.from_snapshot(line) for line in CartStore().snapshot(member_id)]


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api", tags=["orders"])


@order_router.post("/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout(auth: AuthContext = Depends(current_auth)) -> OrderIdResponse:
    """Place an order from the caller's cart.

    The cart is emptied once the order is stored. A cart that could not be
    emptied is logged and does not fail the request.
    """
    order_id = CheckoutCoordinator().checkout(auth)
    return OrderIdResponse(order_id=order_id)


@order_router.get("/order/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, auth: AuthContext = Depends(current_auth)) -> OrderResponse:
    member_id = auth.require_member()
    order = OrderQueries().get_order(order_id, member_id)
    member = MemberRegistry().get(member_id)
    return OrderResponse.from_order(order, member)
