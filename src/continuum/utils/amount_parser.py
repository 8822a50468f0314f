"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(amount_str: str) -> Decimal:
    """Turn what a user typed for a price or value into a Decimal.

    Accepted forms include "15.49", "$15.49", "€1,299.00" and "(12.00)",
    the last one meaning -12.00. Currency symbols and thousands separators
    are dropped; the number itself is parsed exactly.

    Args:
        amount_str: Text entered by the user

    Returns:
        Decimal amount

    Raises:
        ValueError: If the text is empty, not a number, or not finite
    """
    text = (amount_str or "").strip()
    if not text:
        raise ValueError("Empty amount string")

    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    text = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{text}': {e}") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{text}': not a finite number")
    return -amount if negative else amount


def coerce_decimal(text: str) -> Optional[Decimal]:
    """Read the decimal number at the start of stored text.

    Backups written by other tools may carry trailing junk after the number,
    so "12abc" reads as 12. Text with no leading number returns None.
    Currency symbols and thousands separators are not accepted here.
    """
    match = _LEADING_NUMBER.match(text.strip())
    if match is None:
        return None
    return Decimal(match.group())


def is_decimal_text(text: str) -> bool:
    """Return True when the whole of ``text`` is a plain decimal number."""
    return _LEADING_NUMBER.fullmatch(text.strip()) is not None
