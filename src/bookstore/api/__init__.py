"""Bookstore HTTP API package."""

from bookstore.api.errors import register_error_handlers
from bookstore.api.routes import cart_router, catalogue_router, member_router, order_router

__all__ = ["member_router", "catalogue_router", "cart_router", "order_router", "register_error_handlers"]
