from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from bankscreen.schema import BANK_SCHEMA, Schema


def resolve_columns(columns: Iterable[str], schema: Schema = BANK_SCHEMA) -> tuple[str, ...]:
    """Requested columns with unknown ids and repeats dropped, order kept."""
    return schema.known(columns)


def project(
    records: pd.DataFrame,
    columns: Iterable[str],
    schema: Schema = BANK_SCHEMA,
) -> pd.DataFrame:
    """Expose only the requested known fields, in the requested order.

    Known fields the dataset does not carry come back as empty columns.
    """
    return records.reindex(columns=list(resolve_columns(columns, schema)))
