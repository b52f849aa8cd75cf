"""Tests for the sort engine."""

from __future__ import annotations

import pandas as pd

from bankscreen.screener.base import NO_SORT, SortSpec
from bankscreen.screener.sort import sort_records, toggle_sort


def _tickers(df: pd.DataFrame) -> list[str]:
    return list(df["ticker"])


def test_no_field_keeps_input_order(banks) -> None:
    assert _tickers(sort_records(banks, None, "asc")) == ["ABC", "XYZ", "FFB", "QRS"]


def test_direction_none_keeps_input_order(banks) -> None:
    assert _tickers(sort_records(banks, "roe", "none")) == ["ABC", "XYZ", "FFB", "QRS"]


def test_unknown_field_keeps_input_order(banks) -> None:
    assert _tickers(sort_records(banks, "bogus", "desc")) == ["ABC", "XYZ", "FFB", "QRS"]


def test_numeric_ascending_and_descending(banks) -> None:
    assert _tickers(sort_records(banks, "price", "asc")) == ["XYZ", "FFB", "ABC", "QRS"]
    assert _tickers(sort_records(banks, "price", "desc")) == ["QRS", "ABC", "FFB", "XYZ"]


def test_missing_values_sort_last_in_both_directions(banks) -> None:
    assert _tickers(sort_records(banks, "roe", "asc"))[-1] == "FFB"
    assert _tickers(sort_records(banks, "roe", "desc"))[-1] == "FFB"


def test_ties_keep_input_order(banks) -> None:
    # ABC and QRS share roe 12.5
    assert _tickers(sort_records(banks, "roe", "asc")) == ["XYZ", "ABC", "QRS", "FFB"]
    assert _tickers(sort_records(banks, "roe", "desc")) == ["ABC", "QRS", "XYZ", "FFB"]
    flipped = banks.iloc[::-1]
    assert _tickers(sort_records(flipped, "roe", "desc")) == ["QRS", "ABC", "XYZ", "FFB"]


def test_text_sort_is_case_insensitive(banks) -> None:
    # "nyse" (QRS) sorts together with "NYSE" (ABC), ties in input order
    assert _tickers(sort_records(banks, "exchange", "asc")) == ["FFB", "ABC", "QRS", "XYZ"]
    records = pd.DataFrame({"ticker": ["b", "A", "c"]})
    assert _tickers(sort_records(records, "ticker", "asc")) == ["A", "b", "c"]


def test_worked_examples() -> None:
    records = pd.DataFrame({"ticker": ["ABC", "XYZ"], "roe": [12.5, 7.0]})
    assert _tickers(sort_records(records, "roe", "desc")) == ["ABC", "XYZ"]
    records.loc[0, "roe"] = None
    assert _tickers(sort_records(records, "roe", "asc")) == ["XYZ", "ABC"]


def test_input_is_not_modified(banks) -> None:
    before = banks.copy()
    sort_records(banks, "price", "desc")
    pd.testing.assert_frame_equal(banks, before)


def test_toggle_sort_cycle() -> None:
    first = toggle_sort(NO_SORT, "roe")
    assert first == SortSpec(field="roe", direction="asc")
    second = toggle_sort(first, "roe")
    assert second == SortSpec(field="roe", direction="desc")
    assert toggle_sort(second, "roe") == NO_SORT


def test_toggle_sort_new_column_starts_ascending() -> None:
    current = SortSpec(field="roe", direction="desc")
    assert toggle_sort(current, "price") == SortSpec(field="price", direction="asc")
