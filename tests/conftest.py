import pytest
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

from models import RawQuote

# ── Minimal test basket (one per sector, round prices for easy mental math) ──
TEST_QUOTES = [
    RawQuote("RELIANCE.NS", "Reliance Industries", 1000.00, "NSE", 25.0, 40.00),
    RawQuote("HDFCBANK.NS", "HDFC Bank",           1500.00, "NSE", 18.0, 80.00),
    RawQuote("INFY.NS",     "Infosys",             1800.00, "NSE", 27.0, 65.00),
    RawQuote("ITC.NS",      "ITC",                  400.00, "NSE", 24.0, 16.00),
    RawQuote("TECHM.NS",    "Tech Mahindra",       1200.00, "NSE", 30.0, 40.00),
]
# Purchase price = 0.9 * cmp, quantity = 10 for every holding:
#   RELIANCE  investment  9000  present 10000
#   HDFCBANK  investment 13500  present 15000
#   INFY      investment 16200  present 18000
#   ITC       investment  3600  present  4000
#   TECHM     investment 10800  present 12000
# Total investment: 53100, present value: 59000, gain: +5900
# Technology slice: INFY + TECHM = 27000 investment

# ── Same basket as the quotes backend serves it ──
TEST_PAYLOAD = {
    "data": [
        {"symbol": q.symbol, "name": q.name, "cmp": q.cmp, "exchange": q.exchange,
         "peRatio": q.pe_ratio, "earnings": q.earnings}
        for q in TEST_QUOTES
    ]
}


@pytest.fixture
def quotes():
    return list(TEST_QUOTES)


@pytest.fixture
def holdings(quotes):
    import kpis
    return kpis.enrich(quotes)


class FakeQuoteSource:
    """
    Stand-in for ingest.fetch_quotes. Serves `responses` in order; an
    Exception instance in the list is raised instead of returned.
    Records every symbol list it was asked for.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, symbols):
        self.calls.append(list(symbols))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_source():
    return FakeQuoteSource
