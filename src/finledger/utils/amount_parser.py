"""Amount parsing utilities."""

from decimal import Decimal
import re

from finledger.utils.money import to_money


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "1.234,56" (comma as decimal separator)

    Signs are rejected: the direction of a transaction is carried by its
    type, never by the amount.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or carries a sign
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()
    if amount_str.startswith(("-", "(", "+")):
        raise ValueError(f"Amount '{amount_str}' must be given without a sign")

    # Remove currency symbols and whitespace
    amount_str = re.sub(r"[$€£¥\s]", "", amount_str)

    # "1.234,56" style: comma is the decimal separator
    if re.fullmatch(r"\d{1,3}(\.\d{3})+,\d+|\d+,\d{1,2}", amount_str):
        amount_str = amount_str.replace(".", "").replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        return to_money(amount_str)
    except ValueError as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
