"""Bookstore domain: catalogue, members, shopping carts and orders.

All aggregates live in a single Protean domain. Checkout reads the catalogue
price, the member's shipping address and the cart, and writes the order, so
they share one provider and one unit of work.
"""

from protean.domain import Domain

from bookstore.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_file_prefix="bookstore")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
bookstore = Domain(name="bookstore")
