import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture()
def bank_records() -> list[dict[str, Any]]:
    """Three banks as served by the bank API."""
    return [
        {"ticker": "ABC", "bankName": "Alpha Bancorp", "exchange": "NYSE",
         "price": 25.0, "marketCap": 1_200_000_000, "roe": 12.5},
        {"ticker": "XYZ", "bankName": "Xylem Savings", "exchange": "OTC",
         "price": 8.0, "marketCap": 50_000_000, "roe": 7.0},
        {"ticker": "FFB", "bankName": "First Federal Bank", "exchange": "NYSE American",
         "price": None, "marketCap": None, "roe": None},
    ]


@pytest.fixture()
def dataset_dir(tmp_path: Path, bank_records: list[dict[str, Any]]) -> Path:
    """A tmp data dir holding banks.json."""
    (tmp_path / "banks.json").write_text(json.dumps(bank_records), encoding="utf-8")
    return tmp_path
