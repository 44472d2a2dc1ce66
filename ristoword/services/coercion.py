"""
Lenient value coercion for request bodies and path parameters.

Clients (the kitchen/cashier pages, handheld scripts) send whatever their
form fields hold, so numbers may arrive as strings and flags as anything.
"""

import math
import re
from typing import Any, Optional, Union

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_DECIMAL = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
_RADIX = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")


def _parse_numeric_text(text: str) -> Union[int, float]:
    """ASCII decimal or unsigned 0x/0o/0b literal; anything else is 0."""
    if _RADIX.match(text):
        return int(text, 0)
    if _DECIMAL.match(text):
        return float(text)
    return 0


def is_truthy(value: Any) -> bool:
    """
    Truthiness as the clients understand it.

    Unlike Python's ``bool()``, empty lists and objects count as present;
    NaN does not.
    """
    if value is None or value is False:
        return False
    if value is True:
        return True
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def to_number(value: Any) -> Union[int, float]:
    """
    Best-effort number, or zero.

    Examples:
        >>> to_number("7.5")
        7.5
        >>> to_number("abc")
        0
        >>> to_number(True)
        1
    """
    if isinstance(value, bool):
        return int(value)

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        number = _parse_numeric_text(text)
    else:
        return 0

    if isinstance(number, float):
        if not math.isfinite(number):
            return 0
        if number.is_integer():
            return int(number)
    return number


def parse_id(raw: str) -> Optional[int]:
    """Leading integer of a path segment, or None if there is none."""
    match = _INT_PREFIX.match(raw)
    if not match:
        return None
    return int(match.group(1))
