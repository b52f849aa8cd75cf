from bankscreen.core.errors import (
    BankScreenError,
    DatasetFormatError,
    DatasetNotFoundError,
    DuplicateTickerError,
    EmptyDatasetError,
    SchemaError,
    TickerNotFoundError,
    UnknownFieldError,
)

__all__ = [
    "BankScreenError",
    "DatasetFormatError",
    "DatasetNotFoundError",
    "DuplicateTickerError",
    "EmptyDatasetError",
    "SchemaError",
    "TickerNotFoundError",
    "UnknownFieldError",
]
