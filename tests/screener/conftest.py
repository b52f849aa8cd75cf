import pandas as pd
import pytest

from bankscreen.data.store import RecordStore


@pytest.fixture()
def store() -> RecordStore:
    """Four banks with a tie on RoE, missing values and awkward names."""
    return RecordStore.from_records([
        {"ticker": "ABC", "bankName": "Alpha Bancorp", "exchange": "NYSE", "price": 25.0,
         "marketCap": 1_200_000_000, "roe": 12.5, "efficiencyRatio": 55.0, "grahamMoSPct": 30.0},
        {"ticker": "XYZ", "bankName": "Xylem Savings, Inc.", "exchange": "OTC", "price": 8.0,
         "marketCap": 50_000_000, "roe": 7.0, "efficiencyRatio": 72.0, "grahamMoSPct": -5.0},
        {"ticker": "FFB", "bankName": "First Federal Bank", "exchange": "NASDAQ", "price": 15.0,
         "marketCap": 300_000_000, "roe": None, "efficiencyRatio": None, "grahamMoSPct": None},
        {"ticker": "QRS", "bankName": 'Quarry "Rock" Savings', "exchange": "nyse", "price": 40.0,
         "marketCap": 2_500_000_000, "roe": 12.5, "efficiencyRatio": 61.0, "grahamMoSPct": 12.0},
    ])


@pytest.fixture()
def banks(store: RecordStore) -> pd.DataFrame:
    return store.records
