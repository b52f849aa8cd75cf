"""Screening pipeline: store -> filter -> sort -> projection -> (table | CSV)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pandas as pd

from bankscreen.data.store import RecordStore
from bankscreen.screener.export import to_csv
from bankscreen.screener.filter import filter_records
from bankscreen.screener.project import project, resolve_columns
from bankscreen.screener.query import QueryState
from bankscreen.screener.sort import sort_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreenResult:
    """Outcome of applying one query state to the record store."""

    rows: pd.DataFrame = field(repr=False)
    table: pd.DataFrame = field(repr=False)
    columns: tuple[str, ...]
    total_count: int
    matched_count: int
    query: QueryState

    @property
    def tickers(self) -> tuple[str, ...]:
        return tuple(self.rows["ticker"].astype(str))


class Screener:
    """Runs query states against a record store.

    ``refresh`` swaps in a new store in a single assignment, so a run sees
    either the old or the new data set, never a mix.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @property
    def store(self) -> RecordStore:
        return self._store

    def refresh(self, store: RecordStore) -> None:
        logger.info(f"Replacing record store ({len(self._store)} -> {len(store)} banks)")
        self._store = store

    def run(self, state: QueryState) -> ScreenResult:
        store = self._store
        schema = store.schema
        records = store.records

        matched = filter_records(records, state.criteria, schema)
        ordered = sort_records(matched, state.sort.field, state.sort.direction, schema)
        columns = resolve_columns(state.columns, schema)

        logger.info(f"Screened {len(records)} banks, {len(ordered)} matched")
        return ScreenResult(
            rows=ordered,
            table=project(ordered, columns, schema),
            columns=columns,
            total_count=len(records),
            matched_count=len(ordered),
            query=state,
        )

    def export(self, state: QueryState) -> bytes:
        result = self.run(state)
        return to_csv(result.rows, result.columns, self._store.schema)
