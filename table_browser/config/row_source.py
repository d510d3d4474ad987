from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from table_browser.core.exceptions import RowSourceError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".json")


def load_frame(path: Path | str) -> pd.DataFrame:
    """
    Read the row data file into a DataFrame.

    - .csv: header row gives the field names; cells are kept as text
    - .json: a list of records (``orient="records"``)

    :raises RowSourceError: if the file is missing, of an unsupported type or unparsable
    """
    path = Path(path)
    if not path.is_file():
        raise RowSourceError(f"Row data file not found at {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
        elif suffix == ".json":
            df = pd.read_json(path, orient="records")
        else:
            raise RowSourceError(
                f"Unsupported row data file type '{suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
            )
    except (ValueError, pd.errors.ParserError) as e:
        raise RowSourceError(f"Could not parse row data file {path}: {e}") from e

    logger.info(
        "Loaded row data",
        extra={"path": str(path), "n_rows": int(df.shape[0]), "n_fields": int(df.shape[1])},
    )
    return df


def frame_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Records for the table core. Missing values become None so they render
    as empty cells and never match a non-empty filter.
    """
    df = df.copy()
    df.columns = [str(c) for c in df.columns]
    cleaned = df.astype(object).where(df.notna(), None)
    return cleaned.to_dict("records")


def load_rows(path: Path | str) -> List[Dict[str, Any]]:
    return frame_to_rows(load_frame(path))
