from __future__ import annotations

import logging

import pandas as pd

from bankscreen.schema import BANK_SCHEMA, Schema
from bankscreen.screener.base import NO_SORT, Direction, SortSpec

logger = logging.getLogger(__name__)


def sort_records(
    records: pd.DataFrame,
    field: str | None,
    direction: Direction = "asc",
    schema: Schema = BANK_SCHEMA,
) -> pd.DataFrame:
    """Stable sort by one field; missing values go last in either direction.

    Number fields sort numerically, text and category fields
    case-insensitively. Ties keep their input order. No field, direction
    'none', or a field the schema cannot sort returns the input order.
    """
    if field is None or direction not in ("asc", "desc"):
        return records.copy()

    spec = schema.find(field)
    if spec is None or not spec.sortable:
        logger.debug(f"Ignoring sort on unknown or unsortable field '{field}'")
        return records.copy()
    if field not in records.columns:
        return records.copy()

    key = _numeric_key if spec.is_numeric else _text_key
    return records.sort_values(
        by=field,
        ascending=direction == "asc",
        kind="stable",
        na_position="last",
        key=key,
    )


def _numeric_key(column: pd.Series) -> pd.Series:
    return pd.to_numeric(column, errors="coerce")


def _text_key(column: pd.Series) -> pd.Series:
    return column.map(lambda v: str(v).casefold() if pd.notna(v) else None).astype(object)


def toggle_sort(current: SortSpec, field: str) -> SortSpec:
    """Next sort state after clicking a column header.

    A new column starts ascending; the same column cycles
    ascending -> descending -> unsorted.
    """
    if current.field == field:
        if current.direction == "asc":
            return SortSpec(field=field, direction="desc")
        if current.direction == "desc":
            return NO_SORT
    return SortSpec(field=field, direction="asc")
