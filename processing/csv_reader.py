"""
CSV file reader for the pricing catalog export.

Reads every cell as text (prices are parsed later by the validator so that
one bad cell rejects one row, not the whole file), honours quoted fields with
embedded commas, and skips blank lines.  Accepts a filesystem path or any
file-like object, which is what Streamlit's uploader hands over.

Public API:
    read_csv_file(source) → CsvReadResult
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "latin-1")


@dataclass
class CsvReadResult:
    """Complete result of reading one CSV source."""

    raw_dataframe: pd.DataFrame = field(default_factory=pd.DataFrame)
    source_name: str = ""
    encoding: str = ""
    total_rows_read: int = 0
    errors: list[str] = field(default_factory=list)


def read_csv_file(source) -> CsvReadResult:
    """
    Read a catalog CSV into a DataFrame of strings.

    Tries UTF-8 (with or without BOM) first and falls back to Latin-1, the
    two encodings the export has been seen in.

    Args:
        source: Path / str path, or a binary file-like object.

    Returns:
        CsvReadResult with the raw DataFrame (headers as written in the file)
        and any errors.  On failure the DataFrame is empty and errors is
        populated; nothing is raised.
    """
    result = CsvReadResult(source_name=_source_name(source))

    if isinstance(source, (str, Path)) and not Path(source).exists():
        error_message = f"File not found: '{source}'"
        logger.error(error_message)
        result.errors.append(error_message)
        return result

    last_error: Exception | None = None

    for encoding in _ENCODINGS:
        if hasattr(source, "seek"):
            source.seek(0)
        try:
            dataframe = pd.read_csv(
                source,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                skipinitialspace=True,
                encoding=encoding,
            )
        except UnicodeDecodeError as exc:
            last_error = exc
            logger.debug(f"'{result.source_name}' is not {encoding}, retrying")
            continue
        except (pd.errors.ParserError, pd.errors.EmptyDataError, OSError) as exc:
            last_error = exc
            break

        dataframe.columns = [str(col).strip() for col in dataframe.columns]
        duplicated = dataframe.columns.duplicated()
        if duplicated.any():
            logger.warning(
                f"'{result.source_name}': duplicate columns "
                f"{list(dataframe.columns[duplicated])}, keeping the first of each"
            )
            dataframe = dataframe.loc[:, ~duplicated].copy()
        for column in dataframe.columns:
            dataframe[column] = dataframe[column].str.strip()

        result.raw_dataframe = dataframe
        result.encoding = encoding
        result.total_rows_read = len(dataframe)

        logger.info(
            f"Finished reading '{result.source_name}': {result.total_rows_read} rows, "
            f"{len(dataframe.columns)} columns ({encoding})"
        )
        return result

    error_message = f"Cannot read '{result.source_name}': {last_error}"
    logger.error(error_message)
    result.errors.append(error_message)
    return result


def _source_name(source) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    return getattr(source, "name", "uploaded file")
