# src/vetengine/numeric.py
"""
Free-form decimal text handling for the weight and dose fields.

The text box keeps a string, not a number, so the user can clear it or
leave it mid-edit ("3.", "") without the field fighting back. Cleaning
happens on every keystroke, normalization only when the field commits.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

DEFAULT_MAX_DECIMALS = 4

_NOT_DECIMAL_CHAR = re.compile(r"[^0-9.]")


def clean_while_typing(raw: str, max_decimals: int = DEFAULT_MAX_DECIMALS) -> str:
    """
    Strip everything but digits and periods, keep only the first period and
    truncate (never round) the fraction to max_decimals digits.

    Examples:
      "12.3.4.5", 4   -> "12.345"
      "1.23456789", 3 -> "1.234"
      "3."            -> "3."
    """
    if raw == "":
        return ""
    s = _NOT_DECIMAL_CHAR.sub("", raw)
    head, dot, tail = s.partition(".")
    if not dot:
        return head
    tail = tail.replace(".", "")
    return f"{head}.{tail[:max(0, max_decimals)]}"


def normalize_on_commit(raw: str, max_decimals: int = DEFAULT_MAX_DECIMALS) -> str:
    """
    Clean, round half away from zero to max_decimals places and render the
    shortest plain decimal text ("3.50" -> "3.5", "007" -> "7").

    Empty or unparseable input ("", "abc", ".") commits as "".
    """
    cleaned = clean_while_typing(raw, max_decimals)
    if cleaned == "":
        return ""
    quantum = Decimal(1).scaleb(-max(0, max_decimals))
    try:
        rounded = Decimal(cleaned).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # "." alone, or more digits than the decimal context can hold
        return ""
    return _plain(rounded)


def _plain(value: Decimal) -> str:
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
