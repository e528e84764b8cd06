"""
Description normalizer — canonicalises free-text product descriptions so
that listings of the same product compare equal.

Steps, applied in this fixed order (later patterns assume the text is
already lower-cased and accent-free):
  1. Lower-case
  2. Strip diacritics (NFD decomposition, combining marks dropped)
  3. Remove quantity tokens: integer + unit ("395g", "1 l", "200 ml")
  4. Remove packaging words (lata, caixa, tetra pack, ...)
  5. Remove generic marketing modifiers (tradicional, premium, ...)
  6. Remove the brand name
  7. Remove remaining digits and percent signs
  8. Remove remaining punctuation
  9. Collapse whitespace and trim

Word lists live in config/normalization_rules.py.

Public API:
    normalize_description(description) → str
"""

import logging
import re
import unicodedata

from config.normalization_rules import (
    BRAND_TOKENS,
    MODIFIER_TOKENS,
    PACKAGING_TOKENS,
    UNIT_TOKENS,
)

logger = logging.getLogger(__name__)


def _word_pattern(tokens: tuple[str, ...]) -> re.Pattern:
    return re.compile(r"\b(?:" + "|".join(tokens) + r")\b", re.IGNORECASE)


_UNIT_PATTERN = re.compile(
    r"\b\d+\s?(?:" + "|".join(UNIT_TOKENS) + r")\b", re.IGNORECASE
)
_PACKAGING_PATTERN = _word_pattern(PACKAGING_TOKENS)
_MODIFIER_PATTERN = _word_pattern(MODIFIER_TOKENS)
_BRAND_PATTERN = _word_pattern(BRAND_TOKENS)
_DIGIT_PATTERN = re.compile(r"[0-9%]")
_PUNCTUATION_PATTERN = re.compile(r"[^0-9A-Za-z_\s]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_description(description: str | None) -> str:
    """
    Build the grouping key for a product description.

    Examples:
        "Leite Condensado Camponesa 395g" → "leite condensado"
        "Leite Condensado Lata"           → "leite condensado"
        "Requeijão Cremoso Pote 200g"     → "requeijao cremoso"

    Args:
        description: Raw description text.  None, empty and whitespace-only
                     input all give "".

    Returns:
        The normalized key (lowercase ASCII words separated by single spaces).

    Steps run once, in order. A stop word glued to a digit ("un1") only
    becomes a word after digits are removed, so it survives:
    "Manteiga un1" → "manteiga un", and re-normalizing that gives "manteiga".
    """
    if not description or not description.strip():
        return ""

    text = description.lower()
    text = _strip_accents(text)
    text = _UNIT_PATTERN.sub("", text)
    text = _PACKAGING_PATTERN.sub("", text)
    text = _MODIFIER_PATTERN.sub("", text)
    text = _BRAND_PATTERN.sub("", text)
    text = _DIGIT_PATTERN.sub("", text)
    text = _PUNCTUATION_PATTERN.sub("", text)
    text = _WHITESPACE_PATTERN.sub(" ", text).strip()

    return text


def _strip_accents(text: str) -> str:
    """Decompose to NFD and drop combining marks ("ção" → "cao")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))
