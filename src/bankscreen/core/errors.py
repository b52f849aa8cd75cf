from __future__ import annotations


class BankScreenError(Exception):
    """Library base exception."""


class DatasetNotFoundError(BankScreenError):
    """Bank dataset file not found."""


class DatasetFormatError(BankScreenError):
    """Bank dataset file could not be parsed."""


class EmptyDatasetError(BankScreenError):
    """Dataset holds no usable bank records."""


class SchemaError(BankScreenError):
    """Dataset does not fit the field schema."""


class DuplicateTickerError(SchemaError):
    """Ticker appears more than once in the dataset."""


class TickerNotFoundError(BankScreenError):
    """No record for the requested ticker."""


class UnknownFieldError(BankScreenError):
    """Field id is not part of the schema."""
