"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")


def parse_statement_amount(amount_str: str) -> Decimal:
    """Parse a bank statement amount into a two-decimal Decimal.

    Statement exports use decimal-comma notation. Handles:
    - "-50,00"
    - "1234,5"
    - "1 234,56" (space or non-breaking space as thousands separator)
    - "1.234,56" (dot as thousands separator)
    - "+20,00 €"
    - "(12,30)" (negative in parentheses)
    - "12.30" (plain decimal point, when no comma is present)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded half-up to cents, sign preserved

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    original = amount_str
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and all kinds of spaces
    amount_str = re.sub(r"[$€£¥\s]", "", amount_str)

    if "," in amount_str:
        amount_str = amount_str.replace(".", "").replace(",", ".")

    if not re.fullmatch(r"[+-]?\d+(\.\d+)?", amount_str):
        raise ValueError(f"Could not parse amount '{original.strip()}'")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{original.strip()}': {e}")

    if is_negative:
        amount = -amount
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
