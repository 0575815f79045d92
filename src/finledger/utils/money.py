"""Exact decimal money helpers.

All amounts flowing through finledger are ``Decimal``. Floats are only
accepted at the edges and are converted through their string form so that
``0.1`` becomes ``Decimal("0.1")`` rather than its binary approximation.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

MoneyLike = Union[Decimal, int, str, float]


def to_money(value: MoneyLike) -> Decimal:
    """Convert a value to Decimal without losing precision.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def quantize_money(value: MoneyLike) -> Decimal:
    """Round to whole cents (half up). Used when storing, never while aggregating."""
    return to_money(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: MoneyLike) -> str:
    """Render an amount like ``$1,234.50`` (or ``-$12.00``)."""
    amount = quantize_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def round_percent(value: Decimal) -> int:
    """Round a percentage to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
