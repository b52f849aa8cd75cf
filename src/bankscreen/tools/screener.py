"""Screener tools: fields, run, export, statistics and query strings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from bankscreen.core.errors import BankScreenError
from bankscreen.data.loaders import resolve_data_dir
from bankscreen.data.parsing import parse_numeric
from bankscreen.data.store import RecordStore
from bankscreen.schema import BANK_SCHEMA, DEFAULT_COLUMNS
from bankscreen.screener import (
    CategoryCriterion,
    Criterion,
    QueryState,
    RangeCriterion,
    Screener,
    TextCriterion,
    apply_filter,
    decode,
    encode,
    export_filename,
    set_columns,
    set_sort,
    write_csv,
)
from bankscreen.tools.registry import registry


@registry.tool(
    name="screener_fields",
    description="List screenable bank fields with labels, groups and filter styles",
)
def screener_fields() -> dict[str, Any]:
    """Describe the field schema."""
    fields = [
        {
            "id": spec.id,
            "label": spec.label,
            "kind": spec.kind,
            "group": spec.group,
            "filter": spec.filter,
            "query_key": spec.key,
            "filter_scale": spec.filter_scale,
        }
        for spec in BANK_SCHEMA
    ]
    return {"fields": fields, "count": len(fields), "default_columns": list(DEFAULT_COLUMNS)}


@registry.tool(
    name="screener_run",
    description=(
        "Screen banks with a query string (e.g. 'roeMin=8&exchange=NYSE&sort=roe&dir=desc'). "
        "Returns matching rows for the visible columns."
    ),
)
def screener_run(
    query: str = "",
    data_path: str | None = None,
    limit: int = 50,
) -> dict[str, Any]:
    """Apply a query string to the local bank dataset."""
    try:
        store = _load_store(data_path)
    except BankScreenError as exc:
        return {"error": str(exc)}

    state = decode(query)
    result = Screener(store).run(state)
    return {
        "query": encode(state),
        "total": result.total_count,
        "matched": result.matched_count,
        "columns": list(result.columns),
        "rows": _frame_to_records(result.table.head(max(limit, 0))),
    }


@registry.tool(
    name="screener_export",
    description="Export the banks matching a query string to a CSV file",
)
def screener_export(
    query: str = "",
    data_path: str | None = None,
    dest: str | None = None,
) -> dict[str, Any]:
    """Write the screen's visible columns to CSV."""
    try:
        store = _load_store(data_path)
    except BankScreenError as exc:
        return {"error": str(exc)}

    state = decode(query)
    result = Screener(store).run(state)
    path = Path(dest) if dest else resolve_data_dir() / "exports" / export_filename()
    write_csv(result.rows, result.columns, path, store.schema)
    return {
        "path": str(path),
        "rows": result.matched_count,
        "columns": list(result.columns),
    }


@registry.tool(
    name="screener_stats",
    description="Min, max, average, median and count of a numeric bank field",
)
def screener_stats(field: str, data_path: str | None = None) -> dict[str, Any]:
    """Summary statistics for one field."""
    try:
        store = _load_store(data_path)
        stats = store.field_stats(field)
    except BankScreenError as exc:
        return {"field": field, "error": str(exc)}
    return {"field": field, **stats}


@registry.tool(
    name="screener_exchanges",
    description="List the exchanges available for the exchange filter",
)
def screener_exchanges(data_path: str | None = None) -> dict[str, Any]:
    try:
        store = _load_store(data_path)
    except BankScreenError as exc:
        return {"error": str(exc)}
    exchanges = store.exchanges()
    return {"exchanges": exchanges, "count": len(exchanges)}


@registry.tool(
    name="screener_query_encode",
    description=(
        "Build a shareable query string. filters: list of "
        "{'field': 'roe', 'min': 8, 'max': 15}, {'field': 'exchange', 'values': ['NYSE']} "
        "or {'search': 'first'}."
    ),
)
def screener_query_encode(
    filters: list[dict[str, Any]] | None = None,
    sort: str | None = None,
    direction: str = "asc",
    columns: list[str] | None = None,
) -> dict[str, Any]:
    """Encode filters, sort and columns into a query string."""
    state = QueryState()
    if columns:
        state = set_columns(state, columns)
    skipped: list[dict[str, Any]] = []
    for raw in filters or []:
        criterion = _criterion_from_dict(raw)
        if criterion is None:
            skipped.append(raw)
            continue
        state = apply_filter(state, criterion)
    if sort:
        state = set_sort(state, sort, direction)

    result: dict[str, Any] = {"query": encode(state), "columns": list(state.columns)}
    if skipped:
        result["skipped"] = skipped
    return result


@registry.tool(
    name="screener_query_decode",
    description="Explain a screener query string: filters, sort and visible columns",
)
def screener_query_decode(query: str) -> dict[str, Any]:
    state = decode(query)
    return {
        "filters": [_criterion_to_dict(c) for c in state.criteria],
        "sort": {"field": state.sort.field, "direction": state.sort.direction},
        "columns": list(state.columns),
        "has_active_filters": state.has_active_filters,
    }


def _load_store(data_path: str | None) -> RecordStore:
    store = RecordStore.from_path(Path(data_path) if data_path else None)
    store.validate()
    return store


def _frame_to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    clean = df.astype(object).where(df.notna(), None)
    return clean.to_dict(orient="records")


def _criterion_from_dict(raw: dict[str, Any]) -> Criterion | None:
    if "search" in raw:
        return TextCriterion(term=str(raw["search"]))
    field = raw.get("field")
    if not isinstance(field, str) or field not in BANK_SCHEMA:
        return None
    if "values" in raw:
        values = raw["values"]
        return CategoryCriterion(field=field, values=tuple(values) if isinstance(values, list) else values)
    return RangeCriterion(field=field, min=parse_numeric(raw.get("min")), max=parse_numeric(raw.get("max")))


def _criterion_to_dict(criterion: Criterion) -> dict[str, Any]:
    if isinstance(criterion, TextCriterion):
        return {"search": criterion.term}
    if isinstance(criterion, CategoryCriterion):
        return {"field": criterion.field, "values": list(criterion.values)}
    return {"field": criterion.field, "min": criterion.min, "max": criterion.max}
