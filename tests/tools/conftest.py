import json
from pathlib import Path

import pytest


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    """A data dir whose banks.json uses the API envelope."""
    records = [
        {"ticker": "ABC", "bankName": "Alpha Bancorp", "exchange": "NYSE", "price": 25.0,
         "marketCap": 1_200_000_000, "roe": 12.5, "tceToTa": 9.1},
        {"ticker": "XYZ", "bankName": "Xylem Savings, Inc.", "exchange": "OTC", "price": 8.0,
         "marketCap": 50_000_000, "roe": 7.0, "tceToTa": 11.4},
        {"ticker": "FFB", "bankName": "First Federal Bank", "exchange": "NYSE American",
         "price": 15.0, "marketCap": 300_000_000, "roe": None, "tceToTa": None},
    ]
    body = {"success": True, "data": records}
    (tmp_path / "banks.json").write_text(json.dumps(body), encoding="utf-8")
    return tmp_path
