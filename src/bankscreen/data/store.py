"""In-memory record store for one screening session."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from bankscreen.core.errors import (
    DuplicateTickerError,
    EmptyDatasetError,
    SchemaError,
    TickerNotFoundError,
)
from bankscreen.data.loaders import read_dataset, resolve_dataset_path
from bankscreen.schema import BANK_SCHEMA, STANDARD_EXCHANGES, Schema

logger = logging.getLogger(__name__)

# A dataset is usable when at least one record carries one of these.
_CORE_FIELDS = ("price", "marketCap", "roe")


class RecordStore:
    """Immutable collection of bank records, one row per ticker.

    The frame is copied on the way in and on the way out, so a store is
    never changed after construction. Refreshing the data means building
    a new store.
    """

    def __init__(self, frame: pd.DataFrame, schema: Schema = BANK_SCHEMA) -> None:
        if len(frame.columns) == 0:
            frame = pd.DataFrame(columns=["ticker"])
        if "ticker" not in frame.columns:
            msg = "Bank dataset has no 'ticker' column."
            raise SchemaError(msg)

        df = frame.reset_index(drop=True).copy()
        # get() matches tickers case-insensitively, so uniqueness does too.
        upper = df["ticker"].astype("string").str.upper()
        dupes = df["ticker"][upper.duplicated() & upper.notna()].unique().tolist()
        if dupes:
            msg = f"Duplicate tickers in dataset: {', '.join(map(str, dupes))}."
            raise DuplicateTickerError(msg)

        for spec in schema:
            if spec.id not in df.columns:
                df[spec.id] = float("nan") if spec.is_numeric else None
            elif spec.is_numeric:
                df[spec.id] = pd.to_numeric(df[spec.id], errors="coerce").astype("float64")

        self._frame = df
        self._schema = schema
        logger.debug(f"Record store holds {len(df)} banks")

    @classmethod
    def from_records(cls, records: list[dict[str, Any]], schema: Schema = BANK_SCHEMA) -> RecordStore:
        return cls(pd.DataFrame.from_records(records), schema=schema)

    @classmethod
    def from_path(cls, path: Path | None = None, schema: Schema = BANK_SCHEMA) -> RecordStore:
        """Load a store from a dataset file (see :func:`resolve_dataset_path`)."""
        return cls(read_dataset(resolve_dataset_path(path)), schema=schema)

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def records(self) -> pd.DataFrame:
        return self._frame.copy()

    def __len__(self) -> int:
        return len(self._frame)

    def get(self, ticker: str) -> pd.Series:
        """Return one record by ticker, case-insensitively."""
        match = self._frame[self._frame["ticker"].astype(str).str.upper() == ticker.upper()]
        if match.empty:
            msg = f"No bank with ticker '{ticker}'."
            raise TickerNotFoundError(msg)
        return match.iloc[0].copy()

    def validate(self) -> None:
        """Raise EmptyDatasetError unless the store holds usable numeric data."""
        if self._frame.empty:
            msg = "No valid bank records found."
            raise EmptyDatasetError(msg)
        present = [f for f in _CORE_FIELDS if f in self._frame.columns]
        if not present or not self._frame[present].notna().to_numpy().any():
            msg = "No banks have valid numeric data."
            raise EmptyDatasetError(msg)

    def exchanges(self) -> list[str]:
        """Exchanges found in the data, always including the standard US listings."""
        found = {
            str(e) for e in self._frame["exchange"].dropna().unique() if str(e).strip()
        }
        return sorted(found | set(STANDARD_EXCHANGES))

    def field_stats(self, field: str) -> dict[str, float | int | None]:
        """Summary statistics over the non-missing values of a number field."""
        spec = self._schema.get(field)
        if not spec.is_numeric:
            msg = f"Field '{field}' is not numeric."
            raise SchemaError(msg)

        values = self._frame[field].dropna()
        if values.empty:
            return {"min": None, "max": None, "avg": None, "median": None, "count": 0}
        return {
            "min": float(values.min()),
            "max": float(values.max()),
            "avg": float(values.mean()),
            "median": float(values.median()),
            "count": int(values.count()),
        }
