from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import pandas as pd

from bankscreen.core.errors import DatasetFormatError, DatasetNotFoundError

logger = logging.getLogger(__name__)

DATASET_FILENAME = "banks.json"


def resolve_data_dir(dest_dir: Path | None = None) -> Path:
    """Resolve data storage directory. Priority: parameter > BANKSCREEN_DATA_DIR > default."""
    if dest_dir is not None:
        return dest_dir
    env = os.environ.get("BANKSCREEN_DATA_DIR")
    if env:
        return Path(env)
    return Path.home() / ".bankscreen" / "data"


def resolve_dataset_path(path: Path | None = None) -> Path:
    """Resolve the bank dataset file: an explicit file, or banks.json in the data dir."""
    if path is not None and path.suffix and not path.is_dir():
        return path
    return resolve_data_dir(path) / DATASET_FILENAME


def _unwrap_json(body: Any, path: Path) -> list[dict[str, Any]]:
    """Accept a bare list of records or the API envelope {"success": ..., "data": [...]}."""
    if isinstance(body, dict):
        if body.get("success") is False:
            msg = f"Dataset '{path}' holds an unsuccessful response: {body.get('error', 'unknown error')}."
            raise DatasetFormatError(msg)
        body = body.get("data")
    if not isinstance(body, list) or not all(isinstance(r, dict) for r in body):
        msg = f"Dataset '{path}' must be a list of bank records."
        raise DatasetFormatError(msg)
    return body


def read_dataset(path: Path) -> pd.DataFrame:
    """Read a bank dataset (.json, .parquet or .csv) into a DataFrame."""
    if not path.exists():
        msg = f"No bank dataset at '{path}'."
        raise DatasetNotFoundError(msg)

    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            body = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            msg = f"Dataset '{path}' is not valid JSON: {exc}"
            raise DatasetFormatError(msg) from exc
        df = pd.DataFrame.from_records(_unwrap_json(body, path))
    elif suffix == ".parquet":
        df = pd.read_parquet(path)
    elif suffix == ".csv":
        df = pd.read_csv(path, dtype={"ticker": str, "cik": str})
    else:
        msg = f"Unsupported dataset format '{suffix}'. Use .json, .parquet or .csv."
        raise DatasetFormatError(msg)

    logger.info(f"Loaded {len(df)} bank records from {path}")
    return df
