"""CSV export of screener results.

Output is RFC 4180 text: CRLF line endings, fields quoted only when they
hold a comma, quote or newline, UTF-8 encoded. Numbers are written in plain
positional notation so spreadsheets read them back unchanged regardless of
locale.
"""

from __future__ import annotations

import csv
import logging
import math
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from bankscreen.schema import BANK_SCHEMA, DEFAULT_COLUMNS, Schema
from bankscreen.screener.project import project, resolve_columns

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\r\n"


def format_number(value: Any) -> str:
    """Locale-independent decimal text; empty for missing values."""
    if value is None or isinstance(value, bool):
        return "" if value is None else str(value)
    number = float(value)
    if not math.isfinite(number):
        return ""
    return np.format_float_positional(number, trim="-")


def _format_cell(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)) or value is pd.NA:
        return ""
    return str(value)


def to_csv(
    rows: pd.DataFrame,
    columns: Iterable[str],
    schema: Schema = BANK_SCHEMA,
) -> bytes:
    """Render rows as CSV bytes with a header of column display labels.

    Unknown column ids are dropped; when none are left the default columns
    are written. With no rows the output is the header line alone.
    """
    projected = project(rows, resolve_columns(columns, schema) or DEFAULT_COLUMNS, schema)
    labels = [schema.get(c).label for c in projected.columns]

    text = pd.DataFrame(
        {
            c: projected[c].map(format_number if schema.get(c).is_numeric else _format_cell)
            for c in projected.columns
        },
        columns=list(projected.columns),
        dtype=object,
    )
    out = text.to_csv(
        index=False,
        header=labels,
        lineterminator=LINE_TERMINATOR,
        quoting=csv.QUOTE_MINIMAL,
    )
    return out.encode("utf-8")


def export_filename(prefix: str = "bank-screener", on: date | None = None) -> str:
    return f"{prefix}-{(on or date.today()).isoformat()}.csv"


def write_csv(
    rows: pd.DataFrame,
    columns: Iterable[str],
    path: Path,
    schema: Schema = BANK_SCHEMA,
) -> Path:
    """Write the CSV export to ``path``, creating parent directories."""
    payload = to_csv(rows, columns, schema)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    logger.info(f"Exported {len(rows)} banks to {path}")
    return path
