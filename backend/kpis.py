import math
import logging
from dataclasses import asdict

from config import (
    ALL_SECTORS,
    DEFAULT_QUANTITY,
    DEFAULT_SECTOR,
    PURCHASE_PRICE_FACTOR,
    SECTOR_RULES,
)
from models import Holding, PortfolioView, RawQuote, RowMetrics

logger = logging.getLogger(__name__)


def sector_for(symbol: str) -> str:
    """
    Classify a ticker by walking SECTOR_RULES in order; first match wins.
    Pure function of the symbol string (case-sensitive, price is ignored).
    """
    for sector, contains, prefixes in SECTOR_RULES:
        if any(token in symbol for token in contains):
            return sector
        if any(symbol.startswith(prefix) for prefix in prefixes):
            return sector
    return DEFAULT_SECTOR


def enrich_quote(quote: RawQuote) -> Holding:
    """
    Attach the synthetic cost basis, fixed quantity and sector to one quote.
    purchase_price is kept at full precision; rounding happens in presenter.

    Prices are not validated: a negative or non-finite cmp still produces a
    holding, only a warning is logged.
    """
    if not math.isfinite(quote.cmp) or quote.cmp < 0:
        logger.warning("Suspicious price for %s: %r", quote.symbol, quote.cmp)

    return Holding(
        **asdict(quote),
        purchase_price=quote.cmp * PURCHASE_PRICE_FACTOR,
        quantity=DEFAULT_QUANTITY,
        sector=sector_for(quote.symbol),
    )


def enrich(quotes: list[RawQuote]) -> list[Holding]:
    """Same length, same order as the input."""
    return [enrich_quote(q) for q in quotes]


def sector_index(holdings: list[Holding]) -> list[str]:
    """
    ["All", s1, s2, ...] with each sector present once, in first-seen order.
    """
    sectors = [ALL_SECTORS]
    for h in holdings:
        if h.sector not in sectors:
            sectors.append(h.sector)
    return sectors


def filter_holdings(holdings: list[Holding], sector: str) -> list[Holding]:
    # A sector absent from holdings yields [], not an error.
    if sector == ALL_SECTORS:
        return holdings
    return [h for h in holdings if h.sector == sector]


def compute_row(holding: Holding, total_investment: float) -> RowMetrics:
    investment = holding.purchase_price * holding.quantity
    present_value = holding.cmp * holding.quantity

    # Percentage is relative to the visible (filtered) total, not the full portfolio.
    pct = None
    if total_investment != 0:
        pct = investment / total_investment * 100

    return RowMetrics(
        holding=holding,
        investment=investment,
        present_value=present_value,
        gain_loss=present_value - investment,
        portfolio_percentage=pct,
    )


def aggregate(holdings: list[Holding]) -> PortfolioView:
    """
    Totals and per-row metrics over an already filtered holdings set.
    Empty input gives an all-zero view with no rows.
    """
    if not holdings:
        return PortfolioView()

    total_investment = sum(h.purchase_price * h.quantity for h in holdings)
    total_present_value = sum(h.cmp * h.quantity for h in holdings)

    return PortfolioView(
        total_investment=total_investment,
        total_present_value=total_present_value,
        total_gain_loss=total_present_value - total_investment,
        rows=[compute_row(h, total_investment) for h in holdings],
    )


def chart_slices(view: PortfolioView) -> list[tuple[str, float]]:
    """(symbol, investment) pairs for pie-chart slices, rounded to paise."""
    return [(row.holding.symbol, round(row.investment, 2)) for row in view.rows]


def gain_loss_sign(value: float) -> tuple[str, float]:
    """
    Split a gain/loss into a polarity glyph and its absolute magnitude.
    Zero counts as a gain.
    """
    if value >= 0:
        return "+", value
    return "-", abs(value)
