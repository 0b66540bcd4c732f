import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

import ingest
import presenter
from config import CORS_ORIGINS, REFRESH_INTERVAL_SECONDS
from controller import PortfolioController

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

controller = PortfolioController(fetch_quotes=ingest.fetch_quotes)


def run_refresh_cycle() -> None:
    controller.refresh()


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = BackgroundScheduler(timezone=timezone.utc)
    # First run fires immediately (initial load); later runs may overlap and
    # are ordered by the controller's refresh sequence.
    scheduler.add_job(
        run_refresh_cycle,
        trigger=IntervalTrigger(seconds=REFRESH_INTERVAL_SECONDS),
        id="refresh_quotes",
        next_run_time=datetime.now(timezone.utc),
        max_instances=3,
        coalesce=False,
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Quote refresh scheduled every %ds", REFRESH_INTERVAL_SECONDS)
    try:
        yield
    finally:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Stock Portfolio Dashboard", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


class FilterRequest(BaseModel):
    sector: str


def _require_loaded() -> None:
    if not controller.loaded:
        raise HTTPException(status_code=503, detail="Portfolio data is still loading")


@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "loaded": controller.loaded,
        "holdings": len(controller.holdings),
        "last_error": controller.last_error,
        "last_refreshed_at": controller.last_refreshed_at,
    }


@app.get("/api/sectors")
def sectors():
    _require_loaded()
    return controller.sectors()


@app.get("/api/filter")
def get_filter():
    return {"sector": controller.selected_sector}


@app.put("/api/filter")
def set_filter(body: FilterRequest):
    controller.set_filter(body.sector)
    return {"sector": controller.selected_sector}


@app.get("/api/portfolio")
def portfolio(sector: str | None = None):
    _require_loaded()
    selected = controller.selected_sector if sector is None else sector
    view = controller.current_view(selected)
    return {
        "sector": selected,
        "summary": presenter.summary_cards(view),
        "totals": {
            "total_investment": view.total_investment,
            "total_present_value": view.total_present_value,
            "total_gain_loss": view.total_gain_loss,
        },
        "columns": presenter.TABLE_COLUMNS,
        "rows": presenter.table_rows(view),
    }


@app.get("/api/portfolio/chart")
def portfolio_chart(sector: str | None = None):
    _require_loaded()
    return presenter.chart_data(controller.current_view(sector))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
