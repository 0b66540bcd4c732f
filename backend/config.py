import os

SYMBOLS = [
    # Energy
    "RELIANCE.NS",
    # Technology / services
    "TCS.NS", "INFY.NS",
    # Banks & financials
    "HDFCBANK.NS", "ICICIBANK.NS", "KOTAKBANK.NS", "SBIN.NS",
    "BAJFINANCE.NS", "AXISBANK.NS",
    # Consumer & industrials
    "ITC.NS", "LT.NS", "ULTRACEMCO.NS", "MARUTI.NS", "ASIANPAINT.NS",
    # Technology
    "TECHM.NS", "HCLTECH.NS", "WIPRO.NS",
    # Energy
    "COALINDIA.NS",
    # Telecom
    "BHARTIARTL.NS",
]

REFRESH_INTERVAL_SECONDS = 15

PURCHASE_PRICE_FACTOR = 0.9       # Synthetic cost basis: 90% of price at enrichment
DEFAULT_QUANTITY = 10

# (sector, substrings anywhere in symbol, symbol prefixes). First match wins.
SECTOR_RULES = [
    ("Financials", ("BANK",),             ()),
    ("Technology", ("TECH", "WIPRO"),     ("INFY",)),
    ("Energy",     ("RELIANCE", "COAL"),  ()),
]
DEFAULT_SECTOR = "Others"
ALL_SECTORS = "All"

QUOTE_SOURCE = os.environ.get("PORTFOLIO_QUOTE_SOURCE", "http")
QUOTES_URL = os.environ.get(
    "PORTFOLIO_QUOTES_URL",
    "https://stock-portfolio-backend-flax.vercel.app/api/portfolio/quotes",
)
HTTP_TIMEOUT_SECONDS = 10.0

CURRENCY_SYMBOL = "₹"
CHART_COLORS = ["#3b82f6", "#10b981", "#facc15", "#ef4444", "#6366f1", "#f97316"]
CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
