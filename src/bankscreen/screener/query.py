"""Screener query state and its URL query-string form.

A :class:`QueryState` is immutable; every change goes through one of the
transition functions below and yields a new state. ``encode``/``decode``
turn a state into a short, shareable query string and back::

    roeMin=8&grahamMoS=20&exchange=NYSE,OTC&q=first&sort=roe&dir=desc

Keys for absent values are omitted, so the empty state encodes to ``""``.
Decoding never raises: unknown keys are ignored and malformed numbers are
treated as a missing bound.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qs, urlencode

from bankscreen.data.parsing import parse_numeric
from bankscreen.schema import BANK_SCHEMA, DEFAULT_COLUMNS, FieldSpec, Schema
from bankscreen.screener.base import (
    NO_SORT,
    CategoryCriterion,
    Criterion,
    RangeCriterion,
    SortSpec,
    TextCriterion,
)

logger = logging.getLogger(__name__)

SEARCH_KEY = "q"
SORT_KEY = "sort"
DIRECTION_KEY = "dir"
COLUMNS_KEY = "cols"
MIN_SUFFIX = "Min"
MAX_SUFFIX = "Max"


@dataclass(frozen=True)
class QueryState:
    """Active filters, sort and visible columns of one screening session.

    The state is normalised against its ``schema`` on construction, so it
    only ever holds what :func:`encode` can write:

    - at most one criterion per field, in schema order, and only criteria
      the field's filter style accepts;
    - an active sort on a known sortable field, otherwise ``NO_SORT``;
    - known columns without repeats, otherwise the default columns.

    Two states describing the same screen therefore compare equal. The
    schema itself takes no part in equality.
    """

    criteria: tuple[Criterion, ...] = ()
    sort: SortSpec = NO_SORT
    columns: tuple[str, ...] = DEFAULT_COLUMNS
    schema: Schema = field(default=BANK_SCHEMA, repr=False, compare=False)

    def __post_init__(self) -> None:
        schema = self.schema
        by_field: dict[str, Criterion] = {}
        for criterion in self.criteria:
            if criterion.is_empty:
                by_field.pop(criterion.field, None)
            elif isinstance(criterion, TextCriterion) or accepts(schema.find(criterion.field), criterion):
                by_field[criterion.field] = criterion
            else:
                logger.debug(f"Dropping {type(criterion).__name__} on field '{criterion.field}'")
        ordered = sorted(by_field.values(), key=lambda c: (schema.position(c.field), c.field))
        object.__setattr__(self, "criteria", tuple(ordered))
        object.__setattr__(self, "sort", _normalise_sort(self.sort, schema))
        object.__setattr__(self, "columns", schema.known(self.columns) or DEFAULT_COLUMNS)

    @property
    def has_active_filters(self) -> bool:
        return bool(self.criteria)

    def criterion_for(self, field: str) -> Criterion | None:
        for criterion in self.criteria:
            if criterion.field == field:
                return criterion
        return None


# ---------------------------------------------------------------------------
# State transitions
# ---------------------------------------------------------------------------


def accepts(spec: FieldSpec | None, criterion: Criterion) -> bool:
    """Whether the field allows this kind of filter."""
    if spec is None:
        return False
    if isinstance(criterion, RangeCriterion):
        return spec.filter in ("range", "min")
    if isinstance(criterion, CategoryCriterion):
        return spec.filter == "choice"
    return False


def apply_filter(
    state: QueryState, criterion: Criterion, schema: Schema = BANK_SCHEMA,
) -> QueryState:
    """Set the criterion for its field, replacing any previous one.

    Filtering on a field that is not visible adds it to the visible
    columns. A field that is unknown or does not take this kind of filter
    leaves the state unchanged; an empty criterion removes the filter.
    """
    if not isinstance(criterion, TextCriterion) and not accepts(schema.find(criterion.field), criterion):
        logger.warning(f"Ignoring {type(criterion).__name__} on field '{criterion.field}'")
        return state
    if criterion.is_empty:
        return remove_filter(state, criterion.field)

    others = tuple(c for c in state.criteria if c.field != criterion.field)
    columns = state.columns
    if not isinstance(criterion, TextCriterion) and criterion.field not in columns:
        columns = (*columns, criterion.field)
    return replace(state, criteria=(*others, criterion), columns=columns, schema=schema)


def remove_filter(state: QueryState, field: str) -> QueryState:
    """Drop the criterion on ``field``; visible columns are left alone."""
    return replace(state, criteria=tuple(c for c in state.criteria if c.field != field))


def reset_filters(state: QueryState) -> QueryState:
    return replace(state, criteria=())


def set_sort(
    state: QueryState,
    field: str | None,
    direction: str = "asc",
    schema: Schema = BANK_SCHEMA,
) -> QueryState:
    """Sort by ``field``; an unknown field or direction clears the sort."""
    spec = schema.find(field) if field is not None else None
    if spec is None or not spec.sortable or direction not in ("asc", "desc"):
        return replace(state, sort=NO_SORT, schema=schema)
    return replace(state, sort=SortSpec(field=spec.id, direction=direction), schema=schema)  # type: ignore[arg-type]


def set_columns(
    state: QueryState, columns: Iterable[str], schema: Schema = BANK_SCHEMA,
) -> QueryState:
    """Choose visible columns; unknown ids are dropped, nothing left means the defaults."""
    return replace(state, columns=schema.known(columns) or DEFAULT_COLUMNS, schema=schema)


# ---------------------------------------------------------------------------
# Query string
# ---------------------------------------------------------------------------


def encode(state: QueryState, schema: Schema | None = None) -> str:
    """Encode a state as a URL query string, leaving out absent values.

    ``schema`` defaults to the one the state was built against.
    """
    if schema is None:
        schema = state.schema
    pairs: list[tuple[str, str]] = []
    for criterion in state.criteria:
        pairs.extend(_encode_criterion(criterion, schema))

    if state.sort.active and state.sort.field in schema:
        pairs.append((SORT_KEY, state.sort.field))  # type: ignore[arg-type]
        pairs.append((DIRECTION_KEY, state.sort.direction))

    if state.columns != DEFAULT_COLUMNS:
        pairs.append((COLUMNS_KEY, ",".join(state.columns)))

    return urlencode(pairs, safe=",")


def _encode_criterion(criterion: Criterion, schema: Schema) -> list[tuple[str, str]]:
    if isinstance(criterion, TextCriterion):
        return [(SEARCH_KEY, criterion.term)]

    spec = schema.find(criterion.field)
    if spec is None or not accepts(spec, criterion):
        return []
    if isinstance(criterion, CategoryCriterion):
        return [(spec.key, ",".join(criterion.values))]

    pairs: list[tuple[str, str]] = []
    if criterion.min is not None:
        min_key = spec.key if spec.filter == "min" else spec.key + MIN_SUFFIX
        pairs.append((min_key, _format_number(criterion.min)))
    if criterion.max is not None:
        pairs.append((spec.key + MAX_SUFFIX, _format_number(criterion.max)))
    return pairs


def _format_number(value: float) -> str:
    number = float(value)
    if number.is_integer() and abs(number) < 1e16:
        return str(int(number))
    return repr(number)


def decode(query: Any, schema: Schema = BANK_SCHEMA) -> QueryState:
    """Decode a query string into a state, tolerating anything a URL may carry."""
    if not isinstance(query, str):
        return QueryState(schema=schema)
    params = {key: values[-1] for key, values in parse_qs(query.lstrip("?")).items()}
    used: set[str] = set()

    def take(key: str) -> str | None:
        if key in params:
            used.add(key)
            return params[key]
        return None

    criteria: list[Criterion] = []
    for spec in schema.filterable():
        if spec.filter == "choice":
            raw = take(spec.key)
            if raw is not None:
                criteria.append(CategoryCriterion(field=spec.id, values=tuple(raw.split(","))))
            continue

        low = parse_numeric(take(spec.key + MIN_SUFFIX))
        if spec.filter == "min":
            bare = parse_numeric(take(spec.key))
            low = bare if bare is not None else low
        high = parse_numeric(take(spec.key + MAX_SUFFIX))
        if low is not None or high is not None:
            criteria.append(RangeCriterion(field=spec.id, min=low, max=high))

    term = take(SEARCH_KEY)
    if term is not None:
        criteria.append(TextCriterion(term=term))

    sort = _decode_sort(take(SORT_KEY), take(DIRECTION_KEY), schema)

    columns = DEFAULT_COLUMNS
    raw_columns = take(COLUMNS_KEY)
    if raw_columns is not None:
        columns = schema.known(c.strip() for c in raw_columns.split(",")) or DEFAULT_COLUMNS

    ignored = sorted(set(params) - used)
    if ignored:
        logger.debug(f"Ignoring unknown query keys: {', '.join(ignored)}")

    return QueryState(criteria=tuple(criteria), sort=sort, columns=columns, schema=schema)


def _decode_sort(field: str | None, direction: str | None, schema: Schema) -> SortSpec:
    if field is None:
        return NO_SORT
    spec = schema.find(field)
    if spec is None or not spec.sortable:
        return NO_SORT
    direction = (direction or "").strip().lower()
    if direction == "none":
        return NO_SORT
    if direction not in ("asc", "desc"):
        direction = "asc"
    return SortSpec(field=spec.id, direction=direction)  # type: ignore[arg-type]


def _normalise_sort(sort: SortSpec, schema: Schema) -> SortSpec:
    if sort.field is None or sort.direction not in ("asc", "desc"):
        return NO_SORT
    spec = schema.find(sort.field)
    if spec is None or not spec.sortable:
        return NO_SORT
    return sort
