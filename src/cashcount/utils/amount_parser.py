"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str, allow_negative: bool = False) -> Decimal:
    """Parse a monetary amount typed by a user into a Decimal.

    Handles various formats:
    - "100"
    - "0.50"
    - "₹2,000"
    - "$1,234.56"

    Args:
        amount_str: Amount string
        allow_negative: Accept a leading minus sign

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed, or is negative when
            negatives are not allowed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols, thousands separators and whitespace
    cleaned = re.sub(r"[$€£¥₹]", "", amount_str).replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0 and not allow_negative:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount
