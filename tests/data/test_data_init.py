"""Tests for bankscreen.data package-level exports."""

from __future__ import annotations


def test_data_public_api() -> None:
    from bankscreen.data import (
        RecordStore,
        parse_numeric,
        read_dataset,
        resolve_data_dir,
        resolve_dataset_path,
    )

    assert RecordStore is not None
    assert parse_numeric("1") == 1.0
    assert read_dataset is not None
    assert resolve_data_dir is not None
    assert resolve_dataset_path is not None
