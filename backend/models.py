"""Typed records flowing through the refresh pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawQuote:
    symbol: str
    name: str
    cmp: float
    exchange: str
    pe_ratio: float | None = None
    earnings: float | None = None


@dataclass(frozen=True, kw_only=True)
class Holding(RawQuote):
    purchase_price: float
    quantity: int
    sector: str


@dataclass(frozen=True)
class RowMetrics:
    holding: Holding
    investment: float
    present_value: float
    gain_loss: float
    portfolio_percentage: float | None   # None when the view's total investment is 0


@dataclass(frozen=True)
class PortfolioView:
    total_investment: float = 0.0
    total_present_value: float = 0.0
    total_gain_loss: float = 0.0
    rows: list[RowMetrics] = field(default_factory=list)
