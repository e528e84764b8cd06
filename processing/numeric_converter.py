"""
Numeric converter — turns price text from the catalog export into floats.

Handles the currency prefix ("R$"), stray whitespace, thousands separators
and the Brazilian decimal comma ("8,50").  Anything that cannot be read as a
finite, non-negative number comes back as None; the caller decides whether
that rejects the row (unit_price) or just leaves a field blank
(unit_original_price, unit_min_price).

Public API:
    parse_price(value) → float | None
"""

import logging
import math
import re

logger = logging.getLogger(__name__)

_CURRENCY_PATTERN = re.compile(r"r\$|\$", re.IGNORECASE)
_THOUSANDS_DOT_PATTERN = re.compile(r"(?<=\d)\.(?=\d{3}(?:[.,]|$))")
_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

# Words that mean "no value" — convert to blank, not an error
_UNKNOWN_STRINGS: set[str] = {"", "n/a", "na", "-", "—", "null", "none", "nan"}


def parse_price(value) -> float | None:
    """
    Convert a single price cell to a float.

    Examples:
        "8.50"     → 8.5
        "R$ 8,50"  → 8.5
        "1.234,56" → 1234.56
        "1,234.56" → 1234.56
        "abc"      → None
        "-3"       → None (negative)

    Args:
        value: Raw cell value (str, int, float, None or NaN).

    Returns:
        The price as a float, or None if blank, non-numeric, negative or
        non-finite.
    """
    if value is None:
        return None

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
        return number if math.isfinite(number) and number >= 0 else None

    text = str(value).strip()
    if text.lower() in _UNKNOWN_STRINGS:
        return None

    text = _CURRENCY_PATTERN.sub("", text).replace("\u00a0", "").replace(" ", "")

    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            # 1.234,56 — dot groups thousands, comma is the decimal mark
            text = text.replace(".", "").replace(",", ".")
        else:
            # 1,234.56
            text = text.replace(",", "")
    elif "," in text:
        text = text.replace(",", ".")
    else:
        text = _THOUSANDS_DOT_PATTERN.sub("", text) if text.count(".") > 1 else text

    if not _NUMBER_PATTERN.match(text):
        return None

    number = float(text)
    if not math.isfinite(number) or number < 0:
        return None
    return number
