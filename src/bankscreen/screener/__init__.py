from bankscreen.screener.base import (
    DEFAULT_SORT,
    NO_SORT,
    CategoryCriterion,
    Criterion,
    Direction,
    RangeCriterion,
    SortSpec,
    TextCriterion,
)
from bankscreen.screener.export import export_filename, format_number, to_csv, write_csv
from bankscreen.screener.filter import filter_records
from bankscreen.screener.pipeline import Screener, ScreenResult
from bankscreen.screener.project import project, resolve_columns
from bankscreen.screener.query import (
    QueryState,
    apply_filter,
    decode,
    encode,
    remove_filter,
    reset_filters,
    set_columns,
    set_sort,
)
from bankscreen.screener.sort import sort_records, toggle_sort

__all__ = [
    "DEFAULT_SORT",
    "NO_SORT",
    "CategoryCriterion",
    "Criterion",
    "Direction",
    "QueryState",
    "RangeCriterion",
    "ScreenResult",
    "Screener",
    "SortSpec",
    "TextCriterion",
    "apply_filter",
    "decode",
    "encode",
    "export_filename",
    "filter_records",
    "format_number",
    "project",
    "remove_filter",
    "reset_filters",
    "resolve_columns",
    "set_columns",
    "set_sort",
    "sort_records",
    "to_csv",
    "toggle_sort",
    "write_csv",
]
