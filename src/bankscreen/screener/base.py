from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Literal, Union

Direction = Literal["asc", "desc", "none"]


@dataclass(frozen=True)
class RangeCriterion:
    """Numeric range on one field; a missing bound leaves that side open.

    Non-finite bounds (NaN, infinity) count as missing, the same as a
    malformed number in a query string.
    """

    field: str
    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", _finite_or_none(self.min))
        object.__setattr__(self, "max", _finite_or_none(self.max))

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None

    @property
    def is_inverted(self) -> bool:
        return self.min is not None and self.max is not None and self.min > self.max


@dataclass(frozen=True)
class CategoryCriterion:
    """Case-insensitive membership in a set of allowed values (e.g. exchanges)."""

    field: str
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        values = (self.values,) if isinstance(self.values, str) else self.values
        # Values are written comma-joined, so a comma always separates values.
        cleaned = (part.strip() for v in values for part in str(v).split(","))
        object.__setattr__(self, "values", tuple(dict.fromkeys(v for v in cleaned if v)))

    @property
    def is_empty(self) -> bool:
        return not self.values


@dataclass(frozen=True)
class TextCriterion:
    """Case-insensitive substring search over the searchable text fields."""

    # Pseudo field id: the search is not tied to a single column.
    field: ClassVar[str] = "search"

    term: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.term.strip()


Criterion = Union[RangeCriterion, CategoryCriterion, TextCriterion]


def _finite_or_none(value: float | None) -> float | None:
    if value is None:
        return None
    number = float(value)
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class SortSpec:
    """Sort column and direction; no field or direction 'none' keeps input order."""

    field: str | None = None
    direction: Direction = "none"

    @property
    def active(self) -> bool:
        return self.field is not None and self.direction != "none"


NO_SORT = SortSpec()
DEFAULT_SORT = SortSpec(field="marketCap", direction="desc")
