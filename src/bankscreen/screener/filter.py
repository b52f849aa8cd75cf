from __future__ import annotations

import logging
from collections.abc import Iterable

import pandas as pd

from bankscreen.schema import BANK_SCHEMA, Schema
from bankscreen.screener.base import (
    CategoryCriterion,
    Criterion,
    RangeCriterion,
    TextCriterion,
)

logger = logging.getLogger(__name__)


def filter_records(
    records: pd.DataFrame,
    criteria: Iterable[Criterion],
    schema: Schema = BANK_SCHEMA,
) -> pd.DataFrame:
    """Keep the records that satisfy every criterion (logical AND).

    The input frame is not modified; surviving rows keep their index and
    their relative order. No criteria returns every record.
    """
    mask = pd.Series(True, index=records.index, dtype=bool)
    for criterion in criteria:
        part = _eval_criterion(criterion, records, schema)
        if part is not None:
            mask &= part
    return records[mask].copy()


def _eval_criterion(
    criterion: Criterion, records: pd.DataFrame, schema: Schema,
) -> pd.Series | None:
    """Boolean mask for one criterion, or None when it constrains nothing."""
    if criterion.is_empty:
        return None
    if isinstance(criterion, TextCriterion):
        return _eval_text(criterion, records, schema)

    spec = schema.find(criterion.field)
    if spec is None:
        logger.warning(f"Skipping filter on unknown field '{criterion.field}'")
        return None

    if isinstance(criterion, RangeCriterion):
        if not spec.is_numeric:
            logger.warning(f"Skipping range filter on non-numeric field '{spec.id}'")
            return None
        return _eval_range(criterion, _column(records, spec.id), spec.filter_scale)
    if isinstance(criterion, CategoryCriterion):
        return _eval_category(criterion, _column(records, spec.id))

    msg = f"Unsupported criterion type: {type(criterion).__name__}"
    raise TypeError(msg)


def _column(records: pd.DataFrame, field: str) -> pd.Series:
    if field in records.columns:
        return records[field]
    return pd.Series(float("nan"), index=records.index)


def _eval_range(criterion: RangeCriterion, column: pd.Series, scale: float) -> pd.Series:
    # Missing values never satisfy a numeric filter.
    values = pd.to_numeric(column, errors="coerce")
    mask = values.notna()
    if criterion.min is not None:
        mask &= values >= criterion.min * scale
    if criterion.max is not None:
        mask &= values <= criterion.max * scale
    return mask


def _eval_category(criterion: CategoryCriterion, column: pd.Series) -> pd.Series:
    allowed = {str(v).strip().upper() for v in criterion.values}
    normalized = column.astype("string").str.strip().str.upper()
    return normalized.isin(allowed).fillna(False).astype(bool)


def _eval_text(criterion: TextCriterion, records: pd.DataFrame, schema: Schema) -> pd.Series:
    term = criterion.term.strip()
    hits = pd.Series(False, index=records.index, dtype=bool)
    for spec in schema.searchable():
        if spec.id not in records.columns:
            continue
        found = records[spec.id].astype("string").str.contains(term, case=False, regex=False)
        hits |= found.fillna(False).astype(bool)
    return hits
