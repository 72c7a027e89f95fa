"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across
users. State tracks what earlier steps returned so follow-up requests can
reference it.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopper journey."""

    email: str | None = None
    password: str | None = None
    found_isbns: list[str] = field(default_factory=list)
    cart_lines: int = 0
    order_ids: list[str] = field(default_factory=list)
