from bankscreen.schema.fields import (
    BANK_FIELDS,
    BANK_SCHEMA,
    DEFAULT_COLUMNS,
    MILLIONS,
    STANDARD_EXCHANGES,
    FieldSpec,
    Schema,
)

__all__ = [
    "BANK_FIELDS",
    "BANK_SCHEMA",
    "DEFAULT_COLUMNS",
    "MILLIONS",
    "STANDARD_EXCHANGES",
    "FieldSpec",
    "Schema",
]
