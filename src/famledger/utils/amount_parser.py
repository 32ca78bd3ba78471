"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

# Shorthand multipliers accepted after a number, e.g. "200k" or "1.5m"
_SUFFIXES = {
    "k": Decimal("1000"),
    "m": Decimal("1000000"),
    "b": Decimal("1000000000"),
}


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "200000"
    - "200,000" (thousands separators)
    - "200.000đ", "200,000 VND", "₫200000"
    - "200k", "1.5m", "2b"
    - "-150000" or "(150000)" (negative, for revaluation losses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip().lower()

    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]
    if text.startswith("-"):
        is_negative = True
        text = text[1:]

    # Remove currency markers
    text = re.sub(r"vnd|[₫đ$€£¥\s]", "", text)

    multiplier = Decimal("1")
    if text and text[-1] in _SUFFIXES:
        multiplier = _SUFFIXES[text[-1]]
        text = text[:-1]

    # "200.000" uses dots as thousands separators; "1.5" is a decimal
    if re.fullmatch(r"\d{1,3}(\.\d{3})+", text):
        text = text.replace(".", "")
    text = text.replace(",", "")

    try:
        amount = Decimal(text) * multiplier
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
