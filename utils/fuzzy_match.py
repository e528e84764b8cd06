"""
Fuzzy string matching utilities.

Thin wrapper around thefuzz used by the column mapper to recognise CSV
headers that are close to, but not exactly, a canonical column name
("unit price", "retailer_nme").
"""

import logging

from thefuzz import fuzz

logger = logging.getLogger(__name__)


def _prepare(value: str) -> str:
    """Lower-case and treat underscores/hyphens as word separators."""
    return value.strip().lower().replace("_", " ").replace("-", " ")


def best_match(
    value: str,
    candidates: dict[str, str],
    threshold: int = 80,
) -> tuple[str | None, int]:
    """
    Find the best fuzzy match for *value* among *candidates* keys.

    Scores with token_sort_ratio so "price unit" and "unit_price" compare as
    equal.  The first candidate reaching the top score wins.

    Args:
        value: The string to match.
        candidates: Dict of candidate_key → canonical_value.
        threshold: Minimum score (0-100) to accept a match.

    Returns:
        (canonical_value, score) if the best score reaches the threshold,
        otherwise (None, 0).
    """
    if not value or not value.strip() or not candidates:
        return None, 0

    prepared_value = _prepare(value)

    best_canonical: str | None = None
    best_score = 0

    for candidate_key, canonical_value in candidates.items():
        score = fuzz.token_sort_ratio(prepared_value, _prepare(candidate_key))
        if score > best_score:
            best_score = score
            best_canonical = canonical_value

    if best_score >= threshold:
        logger.debug(f"Fuzzy matched '{value}' → '{best_canonical}' (score={best_score})")
        return best_canonical, best_score

    logger.debug(
        f"No fuzzy match for '{value}' above {threshold} "
        f"(closest '{best_canonical}' at {best_score})"
    )
    return None, 0
