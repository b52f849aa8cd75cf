from bankscreen.data.loaders import (
    DATASET_FILENAME,
    read_dataset,
    resolve_data_dir,
    resolve_dataset_path,
)
from bankscreen.data.parsing import parse_numeric
from bankscreen.data.store import RecordStore

__all__ = [
    "DATASET_FILENAME",
    "RecordStore",
    "parse_numeric",
    "read_dataset",
    "resolve_data_dir",
    "resolve_dataset_path",
]
