"""
Column mapper — renames raw CSV headers to the canonical catalog columns.

Uses a three-step cascade:
  1. Exact match against canonical column names (case-insensitive)
  2. Known aliases (e.g. "mercado" → "retailer_name", "uf" → "state_code")
  3. Fuzzy match against canonical column names (thefuzz, threshold 80)

Unmapped headers are reported and dropped by the loader.  When two raw
headers resolve to the same canonical column, the first one keeps it.

Public API:
    map_columns(raw_columns) → ColumnMappingResult
"""

import logging
from dataclasses import dataclass, field

from config.column_mapping import EXACT_MATCHES, KNOWN_RENAMES
from config.schema import CATALOG_COLUMNS
from utils.fuzzy_match import best_match

logger = logging.getLogger(__name__)


@dataclass
class ColumnMappingResult:
    """Result of mapping raw header names to catalog columns."""

    mapping: dict[str, str | None] = field(default_factory=dict)
    """raw_name → canonical name, or None if unmapped."""

    unmapped: list[str] = field(default_factory=list)

    confidence: dict[str, int] = field(default_factory=dict)
    """raw_name → match confidence (100 = exact/alias, 80-99 = fuzzy)."""

    @property
    def rename_map(self) -> dict[str, str]:
        """Only the mapped headers, ready for DataFrame.rename()."""
        return {raw: name for raw, name in self.mapping.items() if name is not None}


_CANONICAL_CANDIDATES: dict[str, str] = {col: col for col in CATALOG_COLUMNS}


def map_columns(raw_columns: list[str]) -> ColumnMappingResult:
    """
    Map raw CSV header names to canonical catalog column names.

    Args:
        raw_columns: Header strings in file order.

    Returns:
        ColumnMappingResult with the mapping, unmapped headers and the
        confidence score of each mapped header.
    """
    result = ColumnMappingResult()
    claimed: set[str] = set()

    for raw_name in raw_columns:
        canonical, score = _map_single_column(str(raw_name))

        if canonical is not None and canonical in claimed:
            logger.warning(
                f"Column '{raw_name}' also maps to '{canonical}' — keeping the first one"
            )
            canonical, score = None, 0

        result.mapping[raw_name] = canonical
        result.confidence[raw_name] = score

        if canonical is None:
            result.unmapped.append(raw_name)
            logger.info(f"Unmapped column: '{raw_name}'")
        else:
            claimed.add(canonical)
            logger.debug(f"Mapped '{raw_name}' → '{canonical}' (confidence={score})")

    logger.info(
        f"Column mapping complete: {len(result.mapping)} columns processed, "
        f"{len(result.unmapped)} unmapped"
    )

    return result


def _map_single_column(raw_name: str) -> tuple[str | None, int]:
    """Run one header through the exact → alias → fuzzy cascade."""
    normalized = raw_name.strip().lower()

    if not normalized:
        return None, 0

    if normalized in EXACT_MATCHES:
        return EXACT_MATCHES[normalized], 100

    if normalized in KNOWN_RENAMES:
        return KNOWN_RENAMES[normalized], 100

    return best_match(normalized, _CANONICAL_CANDIDATES, threshold=80)
