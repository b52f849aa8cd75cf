import json
from pathlib import Path

import pandas as pd
import pytest

from bankscreen.core.errors import DatasetFormatError, DatasetNotFoundError
from bankscreen.data.loaders import read_dataset, resolve_data_dir, resolve_dataset_path


def test_resolve_with_explicit_dir(tmp_path: Path) -> None:
    result = resolve_data_dir(tmp_path / "custom")
    assert result == tmp_path / "custom"


def test_resolve_with_env_var(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("BANKSCREEN_DATA_DIR", str(tmp_path / "env"))
    assert resolve_data_dir() == tmp_path / "env"


def test_resolve_default(monkeypatch) -> None:
    monkeypatch.delenv("BANKSCREEN_DATA_DIR", raising=False)
    assert resolve_data_dir() == Path.home() / ".bankscreen" / "data"


def test_explicit_dir_overrides_env(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("BANKSCREEN_DATA_DIR", str(tmp_path / "env"))
    assert resolve_data_dir(tmp_path / "explicit") == tmp_path / "explicit"


def test_resolve_dataset_path_file_and_dir(tmp_path: Path) -> None:
    assert resolve_dataset_path(tmp_path / "banks.parquet") == tmp_path / "banks.parquet"
    assert resolve_dataset_path(tmp_path) == tmp_path / "banks.json"


def test_read_json_list(dataset_dir: Path) -> None:
    df = read_dataset(dataset_dir / "banks.json")
    assert isinstance(df, pd.DataFrame)
    assert list(df["ticker"]) == ["ABC", "XYZ", "FFB"]


def test_read_json_envelope(tmp_path: Path, bank_records) -> None:
    path = tmp_path / "banks.json"
    path.write_text(json.dumps({"success": True, "count": 3, "data": bank_records}))
    df = read_dataset(path)
    assert len(df) == 3


def test_read_json_unsuccessful_envelope(tmp_path: Path) -> None:
    path = tmp_path / "banks.json"
    path.write_text(json.dumps({"success": False, "error": "Failed to fetch bank data"}))
    with pytest.raises(DatasetFormatError, match="Failed to fetch bank data"):
        read_dataset(path)


def test_read_json_rejects_non_list(tmp_path: Path) -> None:
    path = tmp_path / "banks.json"
    path.write_text(json.dumps({"ticker": "ABC"}))
    with pytest.raises(DatasetFormatError, match="list of bank records"):
        read_dataset(path)


def test_read_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "banks.json"
    path.write_text("{not json")
    with pytest.raises(DatasetFormatError, match="not valid JSON"):
        read_dataset(path)


def test_read_parquet_and_csv(tmp_path: Path, bank_records) -> None:
    df = pd.DataFrame.from_records(bank_records)
    df.to_parquet(tmp_path / "banks.parquet")
    df.to_csv(tmp_path / "banks.csv", index=False)
    assert list(read_dataset(tmp_path / "banks.parquet")["ticker"]) == ["ABC", "XYZ", "FFB"]
    assert list(read_dataset(tmp_path / "banks.csv")["ticker"]) == ["ABC", "XYZ", "FFB"]


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DatasetNotFoundError, match="banks.json"):
        read_dataset(tmp_path / "banks.json")


def test_read_unsupported_format(tmp_path: Path) -> None:
    path = tmp_path / "banks.xlsx"
    path.write_bytes(b"")
    with pytest.raises(DatasetFormatError, match="Unsupported"):
        read_dataset(path)
