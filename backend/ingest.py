import math
import logging

import httpx
import yfinance as yf

from config import HTTP_TIMEOUT_SECONDS, QUOTE_SOURCE, QUOTES_URL
from models import RawQuote

logger = logging.getLogger(__name__)


class QuoteFetchError(Exception):
    """The quote source did not deliver a usable response for this cycle."""


def _sanitize(v):
    if isinstance(v, float) and math.isnan(v):
        return None
    return v


def _quote_from_payload(item: dict) -> RawQuote:
    return RawQuote(
        symbol=item["symbol"],
        name=item["name"],
        cmp=float(item["cmp"]),
        exchange=item["exchange"],
        pe_ratio=_sanitize(item.get("peRatio")),
        earnings=_sanitize(item.get("earnings")),
    )


def fetch_quotes_http(symbols: list[str], client: httpx.Client | None = None) -> list[RawQuote]:
    """
    Request all symbols from the quotes backend in one call:
        GET QUOTES_URL?symbols=RELIANCE.NS,TCS.NS,...
    Response body: {"data": [{"symbol", "name", "cmp", "exchange",
                              "peRatio", "earnings"}, ...]}

    The backend may resolve fewer symbols than requested; only what it
    returns is kept. Anything else wrong with the call (transport error,
    non-2xx, bad JSON, missing keys) raises QuoteFetchError.
    """
    params = {"symbols": ",".join(symbols)}
    try:
        if client is None:
            with httpx.Client(timeout=HTTP_TIMEOUT_SECONDS) as c:
                response = c.get(QUOTES_URL, params=params)
        else:
            response = client.get(QUOTES_URL, params=params)
        response.raise_for_status()
        payload = response.json()
        return [_quote_from_payload(item) for item in payload["data"]]
    except httpx.HTTPError as exc:
        raise QuoteFetchError(f"Quote request failed: {exc}") from exc
    except (ValueError, KeyError, TypeError) as exc:
        raise QuoteFetchError(f"Malformed quote payload: {exc!r}") from exc


def fetch_single_quote(symbol: str) -> RawQuote | None:
    """
    Fetch one quote via yf.Ticker(). Returns None on failure. Never raises.

    Price comes from fast_info.last_price; a missing or NaN price is a hard
    failure. Name, P/E and EPS come from Ticker.info when Yahoo serves it,
    otherwise they fall back to the symbol / None.
    """
    try:
        t = yf.Ticker(symbol)
        fi = t.fast_info

        price = fi.last_price
        if price is None or (isinstance(price, float) and math.isnan(price)):
            return None

        try:
            info = t.info or {}
        except Exception:
            info = {}

        exchange = info.get("exchange") or getattr(fi, "exchange", None) or ""

        return RawQuote(
            symbol=symbol,
            name=info.get("longName") or info.get("shortName") or symbol,
            cmp=float(price),
            exchange=exchange,
            pe_ratio=_sanitize(info.get("trailingPE")),
            earnings=_sanitize(info.get("trailingEps")),
        )

    except Exception:
        return None


def fetch_quotes_yfinance(symbols: list[str]) -> list[RawQuote]:
    """
    Call fetch_single_quote() for each symbol sequentially.
    On per-symbol failure: log a warning, continue.
    If nothing at all came back, the cycle counts as a fetch failure.
    """
    quotes: list[RawQuote] = []
    failed: list[str] = []

    for symbol in symbols:
        quote = fetch_single_quote(symbol)
        if quote is None:
            logger.warning("Failed to fetch ticker: %s", symbol)
            failed.append(symbol)
        else:
            quotes.append(quote)

    if symbols and not quotes:
        raise QuoteFetchError(f"All {len(failed)} tickers failed")
    return quotes


def fetch_quotes(symbols: list[str]) -> list[RawQuote]:
    if QUOTE_SOURCE == "yfinance":
        return fetch_quotes_yfinance(symbols)
    return fetch_quotes_http(symbols)
