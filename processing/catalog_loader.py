"""
Catalog loader — the ingestion pipeline in one call.

Steps:
  1. Read the CSV (csv_reader)
  2. Map headers to catalog columns (column_mapper), dropping unmapped ones
  3. Validate rows into ProductObservation records (record_validator)

Public API:
    load_observations(source) → LoadResult
"""

import logging
from dataclasses import dataclass, field

from processing.column_mapper import map_columns
from processing.csv_reader import read_csv_file
from processing.models import ProductObservation
from processing.record_validator import RejectedRow, validate_records

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Observations ready for the dashboard, plus what was lost on the way."""

    observations: list[ProductObservation] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)
    unmapped_columns: list[str] = field(default_factory=list)
    total_rows_read: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def load_observations(source) -> LoadResult:
    """
    Read, map and validate a catalog CSV.

    Args:
        source: Path or binary file-like object (see read_csv_file).

    Returns:
        LoadResult.  Read failures and missing required columns end up in
        ``errors`` with an empty observation list.
    """
    result = LoadResult()

    read_result = read_csv_file(source)
    result.total_rows_read = read_result.total_rows_read
    if read_result.errors:
        result.errors.extend(read_result.errors)
        return result

    mapping_result = map_columns(read_result.raw_dataframe.columns.tolist())
    result.unmapped_columns = mapping_result.unmapped

    dataframe = read_result.raw_dataframe[list(mapping_result.rename_map)]
    dataframe = dataframe.rename(columns=mapping_result.rename_map)

    try:
        validation = validate_records(dataframe)
    except ValueError as exc:
        error_message = f"{read_result.source_name}: {exc}"
        logger.error(error_message)
        result.errors.append(error_message)
        return result

    result.observations = validation.observations
    result.rejected = validation.rejected

    logger.info(
        f"Loaded {len(result.observations)} observations from "
        f"'{read_result.source_name}' ({result.total_rows_read} rows read, "
        f"{len(result.rejected)} rejected)"
    )

    return result
