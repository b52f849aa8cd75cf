"""Tests for bankscreen.screener package-level exports."""

from __future__ import annotations


def test_screener_public_api() -> None:
    from bankscreen.screener import (
        DEFAULT_SORT,
        NO_SORT,
        QueryState,
        Screener,
        decode,
        encode,
        filter_records,
        project,
        sort_records,
        to_csv,
        toggle_sort,
    )

    assert DEFAULT_SORT.field == "marketCap"
    assert DEFAULT_SORT.direction == "desc"
    assert not NO_SORT.active
    assert encode(QueryState()) == ""
    assert decode("") == QueryState()
    assert Screener is not None
    assert filter_records is not None
    assert project is not None
    assert sort_records is not None
    assert to_csv is not None
    assert toggle_sort(NO_SORT, "roe").direction == "asc"
