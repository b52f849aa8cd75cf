"""Field schema for bank records.

Every stage of the screener (filter, sort, projection, export, query
string) validates field ids against a :class:`Schema` once instead of
trusting caller-supplied strings.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from bankscreen.core.errors import UnknownFieldError

FieldKind = Literal["number", "text", "category"]
FilterStyle = Literal["range", "min", "choice"]

# Money inputs on the filter panel are entered in millions of dollars.
MILLIONS = 1e6

STANDARD_EXCHANGES: tuple[str, ...] = ("NASDAQ", "NYSE", "OTC")


@dataclass(frozen=True)
class FieldSpec:
    """One column/attribute of a bank record."""

    id: str
    label: str
    kind: FieldKind = "number"
    group: str = ""
    filter: FilterStyle | None = None
    filter_scale: float = 1.0
    query_key: str = ""
    searchable: bool = False
    sortable: bool = True

    @property
    def key(self) -> str:
        """Name used for this field in a query string."""
        return self.query_key or self.id

    @property
    def is_numeric(self) -> bool:
        return self.kind == "number"


@dataclass(frozen=True)
class Schema:
    """Ordered, immutable mapping of field id to :class:`FieldSpec`."""

    fields: tuple[FieldSpec, ...]
    _by_id: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)
    _by_key: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)
    _order: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.fields, list):
            object.__setattr__(self, "fields", tuple(self.fields))
        by_id: dict[str, FieldSpec] = {}
        for spec in self.fields:
            if spec.id in by_id:
                msg = f"Duplicate field id '{spec.id}' in schema."
                raise ValueError(msg)
            by_id[spec.id] = spec
        object.__setattr__(self, "_by_id", by_id)
        object.__setattr__(self, "_by_key", {s.key: s for s in self.fields})
        object.__setattr__(self, "_order", {s.id: i for i, s in enumerate(self.fields)})

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._by_id

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, field_id: str) -> FieldSpec:
        try:
            return self._by_id[field_id]
        except KeyError:
            msg = f"Unknown field '{field_id}'."
            raise UnknownFieldError(msg) from None

    def find(self, field_id: str) -> FieldSpec | None:
        return self._by_id.get(field_id)

    def by_query_key(self, key: str) -> FieldSpec | None:
        return self._by_key.get(key)

    def position(self, field_id: str) -> int:
        """Index of the field in schema order; unknown ids sort last."""
        return self._order.get(field_id, len(self._order))

    def ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.fields)

    def filterable(self) -> tuple[FieldSpec, ...]:
        return tuple(s for s in self.fields if s.filter is not None)

    def searchable(self) -> tuple[FieldSpec, ...]:
        return tuple(s for s in self.fields if s.searchable)

    def known(self, field_ids: Iterable[str]) -> tuple[str, ...]:
        """Keep known field ids in the given order, dropping unknowns and repeats."""
        seen: set[str] = set()
        result: list[str] = []
        for fid in field_ids:
            if fid in self._by_id and fid not in seen:
                seen.add(fid)
                result.append(fid)
        return tuple(result)


def _money(id: str, label: str, group: str, filter: FilterStyle | None = None) -> FieldSpec:
    scale = MILLIONS if filter else 1.0
    return FieldSpec(id=id, label=label, group=group, filter=filter, filter_scale=scale)


BANK_FIELDS: tuple[FieldSpec, ...] = (
    # Basic info
    FieldSpec("ticker", "Ticker", kind="text", group="info", searchable=True),
    FieldSpec("bankName", "Bank Name", kind="text", group="info", searchable=True),
    FieldSpec("exchange", "Exchange", kind="category", group="info", filter="choice"),
    FieldSpec("cik", "CIK", kind="text", group="info"),
    # Market data
    FieldSpec("price", "Price", group="market"),
    _money("marketCap", "Mkt Cap", "market", filter="range"),
    # Balance sheet: assets
    _money("totalAssets", "Assets", "bs-assets", filter="range"),
    _money("cashAndDueFromBanks", "Cash", "bs-assets"),
    _money("interestBearingDepositsInBanks", "IB Deposits", "bs-assets"),
    _money("afsSecurities", "AFS Sec", "bs-assets"),
    _money("htmSecurities", "HTM Sec", "bs-assets"),
    _money("loans", "Loans", "bs-assets"),
    _money("allowanceForCreditLosses", "ALLL", "bs-assets"),
    _money("premisesAndEquipment", "PP&E", "bs-assets"),
    # Balance sheet: liabilities and equity
    _money("totalLiabilities", "Liabilities", "bs-liab"),
    _money("totalDeposits", "Deposits", "bs-liab", filter="range"),
    _money("shortTermBorrowings", "ST Borrow", "bs-liab"),
    _money("longTermDebt", "LT Debt", "bs-liab"),
    _money("totalEquity", "Equity", "bs-liab"),
    _money("goodwill", "Goodwill", "bs-liab"),
    _money("intangibles", "Intang", "bs-liab"),
    # Income statement (TTM)
    _money("ttmInterestIncome", "Int Inc", "income"),
    _money("ttmInterestExpense", "Int Exp", "income"),
    _money("ttmNetInterestIncome", "NII", "income", filter="range"),
    _money("ttmNoninterestIncome", "NonInt Inc", "income"),
    _money("ttmNoninterestExpense", "NonInt Exp", "income"),
    _money("ttmProvisionForCreditLosses", "Provision", "income"),
    _money("ttmPreTaxIncome", "Pre-Tax", "income"),
    _money("ttmNetIncome", "Net Inc", "income", filter="range"),
    # Cash flow
    _money("ttmOperatingCashFlow", "Op CF", "cashflow"),
    # Per share
    _money("sharesOutstanding", "Shares", "per-share", filter="range"),
    FieldSpec("bvps", "BVPS", group="per-share", filter="range"),
    FieldSpec("tbvps", "TBVPS", group="per-share", filter="range"),
    FieldSpec("ttmEps", "EPS", group="per-share", filter="range"),
    FieldSpec(
        "ttmDividendPerShare", "DPS", group="per-share", filter="range",
        query_key="ttmDividend",
    ),
    # Valuation
    FieldSpec("pni", "P/E", group="valuation", filter="range"),
    FieldSpec("ptbvps", "P/TBV", group="valuation", filter="range"),
    # Performance
    FieldSpec("roe", "RoE", group="performance", filter="range"),
    FieldSpec("roaa", "ROAA", group="performance", filter="range"),
    FieldSpec("rota", "RoTA", group="performance", filter="range"),
    FieldSpec("rotce", "ROTCE", group="performance", filter="range"),
    # Bank ratios
    FieldSpec("efficiencyRatio", "Efficiency", group="bank-ratios", filter="range"),
    FieldSpec("depositsToAssets", "Dep/Assets", group="bank-ratios", filter="range"),
    FieldSpec("equityToAssets", "Eq/Assets", group="bank-ratios", filter="range"),
    FieldSpec("tceToTa", "TCE/TA", group="bank-ratios", filter="range"),
    # Dividends
    FieldSpec("dividendPayoutRatio", "Payout", group="dividends", filter="range"),
    # Graham value investing
    FieldSpec("grahamNum", "Graham #", group="graham"),
    FieldSpec("grahamMoSPct", "MoS %", group="graham", filter="min", query_key="grahamMoS"),
)

BANK_SCHEMA = Schema(fields=BANK_FIELDS)

DEFAULT_COLUMNS: tuple[str, ...] = (
    "ticker",
    "bankName",
    "exchange",
    "price",
    "marketCap",
    "pni",
    "ptbvps",
    "roe",
    "roaa",
    "rotce",
    "efficiencyRatio",
    "grahamMoSPct",
)
