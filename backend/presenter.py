"""
Display formatting for the dashboard frontend.

Everything here is rounding and labelling on top of a PortfolioView; no
arithmetic that changes a value lives in this module.
"""

from config import CHART_COLORS, CURRENCY_SYMBOL
from kpis import chart_slices, gain_loss_sign
from models import PortfolioView, RowMetrics

TABLE_COLUMNS = [
    "Stock",
    "Purchase Price",
    "Quantity",
    "Investment",
    "Portfolio %",
    "Exchange",
    "CMP",
    "Present Value",
    "Gain/Loss",
    "P/E Ratio",
    "Earnings",
]


def format_currency(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{CURRENCY_SYMBOL}{value:.2f}"


def format_signed_currency(value: float) -> str:
    """'+₹1000.00' / '-₹5.00': one sign glyph, absolute magnitude."""
    sign, magnitude = gain_loss_sign(value)
    return f"{sign}{CURRENCY_SYMBOL}{magnitude:.2f}"


def format_percentage(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:.1f}%"


def polarity(value: float) -> str:
    return "gain" if value >= 0 else "loss"


def table_row(row: RowMetrics) -> dict:
    h = row.holding
    return {
        "Stock":          h.name,
        "Purchase Price": format_currency(h.purchase_price),
        "Quantity":       h.quantity,
        "Investment":     format_currency(row.investment),
        "Portfolio %":    format_percentage(row.portfolio_percentage),
        "Exchange":       h.exchange,
        "CMP":            format_currency(h.cmp),
        "Present Value":  format_currency(row.present_value),
        "Gain/Loss":      format_signed_currency(row.gain_loss),
        "P/E Ratio":      h.pe_ratio,
        "Earnings":       format_currency(h.earnings),
        "symbol":         h.symbol,
        "sector":         h.sector,
        "polarity":       polarity(row.gain_loss),
    }


def table_rows(view: PortfolioView) -> list[dict]:
    return [table_row(r) for r in view.rows]


def summary_cards(view: PortfolioView) -> list[dict]:
    return [
        {"title": "Total Investment", "value": format_currency(view.total_investment)},
        {"title": "Present Value",    "value": format_currency(view.total_present_value)},
        {
            "title": "Total Gain/Loss",
            "value": format_signed_currency(view.total_gain_loss),
            "polarity": polarity(view.total_gain_loss),
        },
    ]


def chart_data(view: PortfolioView) -> list[dict]:
    return [
        {"name": label, "value": value, "color": CHART_COLORS[i % len(CHART_COLORS)]}
        for i, (label, value) in enumerate(chart_slices(view))
    ]
