"""Monetary arithmetic for prices and order amounts.

Catalogue prices are persisted as two-decimal floats; order amounts are
persisted as decimal strings so that no quantity makes them inexact. Every
calculation goes through ``Decimal`` quantized to cents, so the same
quantities and prices always produce the same amounts, however often they
are recomputed.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Quantities are unbounded, so amounts need more digits than the default 28
MONEY_CONTEXT = Context(prec=100, rounding=ROUND_HALF_UP)


def to_money(value) -> Decimal:
    """Convert a stored or user-supplied price to a cent-quantized ``Decimal``.

    Floats go through ``repr`` so that ``5.5`` becomes ``Decimal("5.50")``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a monetary amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    return amount.quantize(CENT, context=MONEY_CONTEXT)


def line_amount(quantity: int, unit_price) -> Decimal:
    with localcontext(MONEY_CONTEXT):
        return (to_money(unit_price) * quantity).quantize(CENT)


def total_of(amounts: Iterable) -> Decimal:
    with localcontext(MONEY_CONTEXT):
        return sum((to_money(amount) for amount in amounts), ZERO)


def to_stored(amount) -> str:
    """Exact string form used for persisted order amounts."""
    return str(to_money(amount))


def format_money(amount) -> str:
    return f"{to_money(amount):.2f}"
