"""
Record validator — turns mapped catalog rows into ProductObservation records.

A row becomes an observation only if it has a description, a retailer, a
state code from the fixed valid set and a unit price that parses as a finite,
non-negative number.  Everything else is reported in the rejected list with
a reason; nothing is raised for bad data.

Optional fields are cleaned on the way in: state codes are trimmed and
upper-cased, optional prices are parsed (blank when unreadable) and image
placeholders such as "N/A" become None.

Public API:
    validate_records(dataframe) → ValidationResult
"""

import logging
from dataclasses import dataclass, field

import pandas as pd

from config.schema import MISSING_IMAGE_VALUES, REQUIRED_COLUMNS, VALID_STATE_CODES
from processing.models import ProductObservation
from processing.numeric_converter import parse_price

logger = logging.getLogger(__name__)

_VALID_STATES: frozenset[str] = frozenset(VALID_STATE_CODES)


@dataclass
class RejectedRow:
    """A source row that did not satisfy the observation invariants."""

    row_index: int
    reason: str
    values: dict[str, str] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Output of validate_records()."""

    observations: list[ProductObservation] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.observations) + len(self.rejected)


def validate_records(dataframe: pd.DataFrame) -> ValidationResult:
    """
    Validate every row and build observations in source order.

    Args:
        dataframe: Catalog rows with canonical column names (output of the
                   column mapper rename).

    Returns:
        ValidationResult with the valid observations and the rejected rows.

    Raises:
        ValueError: If a required column is missing altogether.
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in dataframe.columns]
    if missing:
        raise ValueError(
            f"Missing required columns: {missing}. "
            f"Available columns: {list(dataframe.columns)}"
        )

    result = ValidationResult()

    for idx, row in dataframe.iterrows():
        values = {col: _text(row.get(col)) for col in dataframe.columns}
        observation, reason = _build_observation(values)

        if observation is None:
            result.rejected.append(RejectedRow(row_index=idx, reason=reason, values=values))
            logger.debug(f"Rejected row {idx}: {reason}")
            continue

        result.observations.append(observation)

    if result.rejected:
        logger.warning(
            f"{len(result.rejected)} of {result.total_rows} rows rejected during validation"
        )

    logger.info(
        f"Validation complete: {len(result.observations)} valid observations, "
        f"{len(result.rejected)} rejected"
    )

    return result


def _build_observation(values: dict[str, str]) -> tuple[ProductObservation | None, str]:
    """
    Build one observation from a row's text values.

    Returns:
        (observation, "") on success, (None, reason) otherwise.
    """
    description = values.get("description", "")
    if not description:
        return None, "Missing description"

    retailer_name = values.get("retailer_name", "")
    if not retailer_name:
        return None, "Missing retailer"

    state_code = values.get("state_code", "").upper()
    if state_code not in _VALID_STATES:
        return None, f"Invalid state code '{values.get('state_code', '')}'"

    raw_price = values.get("unit_price", "")
    unit_price = parse_price(raw_price)
    if unit_price is None:
        return None, f"Invalid unit price '{raw_price}'"

    image_ref = values.get("image_ref", "")
    if image_ref.lower() in MISSING_IMAGE_VALUES:
        image_ref = None

    observation = ProductObservation(
        product_id=values.get("product_id", ""),
        description=description,
        unit_price=unit_price,
        retailer_name=retailer_name,
        state_code=state_code,
        city=values.get("city", ""),
        neighborhood=values.get("neighborhood", ""),
        details=values.get("details", ""),
        image_ref=image_ref,
        unit_original_price=parse_price(values.get("unit_original_price")),
        unit_min_price=parse_price(values.get("unit_min_price")),
        merchant_id=values.get("merchant_id", ""),
    )
    return observation, ""


def _text(value) -> str:
    """Cell value as stripped text; NaN/None become ''."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()
