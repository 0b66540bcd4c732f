"""
Owner of the live portfolio state.

Two slots are mutable: the current holdings and the selected sector. Both
are only ever replaced as whole values. Refreshes may overlap (the scheduler
allows concurrent runs), so each one is stamped with a monotonic sequence
number. A response is applied only if it is newer than the last applied
one, so out-of-order arrivals are dropped and the newest completed refresh
always wins.
"""

import logging
import threading
import time
from typing import Callable

import kpis
from config import ALL_SECTORS, SYMBOLS
from ingest import QuoteFetchError
from models import Holding, PortfolioView, RawQuote

logger = logging.getLogger(__name__)


class PortfolioController:
    def __init__(
        self,
        fetch_quotes: Callable[[list[str]], list[RawQuote]],
        symbols: list[str] | None = None,
    ):
        self._fetch_quotes = fetch_quotes
        self.symbols = list(symbols if symbols is not None else SYMBOLS)

        self._holdings: tuple[Holding, ...] = ()
        self._selected_sector = ALL_SECTORS
        self._latest_issued = 0
        self._latest_applied = 0
        self._error_sequence = 0
        self._lock = threading.Lock()

        self.loaded = False
        self.last_error: str | None = None
        self.last_refreshed_at: float | None = None

    # ── state slots ─────────────────────────────────────────────────────────

    @property
    def holdings(self) -> list[Holding]:
        return list(self._holdings)

    @property
    def selected_sector(self) -> str:
        return self._selected_sector

    def set_filter(self, sector: str) -> None:
        self._selected_sector = sector

    # ── refresh cycle ───────────────────────────────────────────────────────

    def begin_refresh(self) -> int:
        with self._lock:
            self._latest_issued += 1
            return self._latest_issued

    def apply(self, sequence: int, quotes: list[RawQuote]) -> bool:
        """
        Replace the holdings slot with a freshly enriched collection.
        Returns False (and leaves state untouched) when a newer refresh has
        already been applied.
        """
        holdings = tuple(kpis.enrich(quotes))
        with self._lock:
            if sequence <= self._latest_applied:
                logger.info(
                    "Discarding stale refresh #%d (latest applied #%d)",
                    sequence, self._latest_applied,
                )
                return False
            self._holdings = holdings
            self._latest_applied = sequence
            if sequence > self._error_sequence:
                self.last_error = None
            self.last_refreshed_at = time.time()
            self.loaded = True
        return True

    def record_failure(self, sequence: int, error: str) -> bool:
        """
        Remember a failed refresh unless newer data or a newer failure is
        already in place. The holdings slot is never touched.
        """
        with self._lock:
            self.loaded = True
            if sequence <= max(self._latest_applied, self._error_sequence):
                return False
            self.last_error = error
            self._error_sequence = sequence
        return True

    def refresh(self) -> bool:
        """
        One full fetch-enrich-replace pass.
        A failed fetch is logged and keeps the previous holdings; the next
        scheduled run is the only retry.
        """
        sequence = self.begin_refresh()
        try:
            quotes = self._fetch_quotes(self.symbols)
        except QuoteFetchError as exc:
            logger.warning("Refresh #%d failed: %s", sequence, exc)
            self.record_failure(sequence, str(exc))
            return False

        returned = {q.symbol for q in quotes}
        missing = [s for s in self.symbols if s not in returned]
        if missing:
            logger.warning("Quote source did not resolve: %s", ", ".join(missing))

        applied = self.apply(sequence, quotes)
        if applied:
            logger.info("Refresh #%d applied: %d holdings", sequence, len(quotes))
        return applied

    # ── derived views ───────────────────────────────────────────────────────

    def sectors(self) -> list[str]:
        return kpis.sector_index(list(self._holdings))

    def current_view(self, sector: str | None = None) -> PortfolioView:
        selected = self._selected_sector if sector is None else sector
        return kpis.aggregate(kpis.filter_holdings(list(self._holdings), selected))

    def chart_slices(self, sector: str | None = None) -> list[tuple[str, float]]:
        return kpis.chart_slices(self.current_view(sector))
