from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import quote, urlencode

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from sales_dashboard.config import ensure_config_file, load_config
from sales_dashboard.core.aggregation import aggregate, format_currency
from sales_dashboard.core.models import transaction_to_dict
from sales_dashboard.core.positioning import PointerEvent, clamp_offset, replay_drag
from sales_dashboard.dashboard import ViewState, build_dashboard, month_name
from sales_dashboard.loaders import get_loader
from sales_dashboard.provider import DataProvider
from sales_dashboard.utils import filter_transactions_by_month, paginate, search_transactions

logging.basicConfig(level=os.getenv("SALES_DASHBOARD_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

# Size of the floating stats box in pixels; the template uses the same numbers.
STATS_BOX_WIDTH = 256
STATS_BOX_HEIGHT = 160

config = load_config()
provider = DataProvider(get_loader(config["source"], config), config["source"])


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.update(ensure_config_file())
    logger.info("Serving transactions from %s", config["source"])
    yield


app = FastAPI(title="Sales Dashboard", lifespan=lifespan)
templates = Jinja2Templates(directory=str(Path(__file__).with_name("templates")))
templates.env.filters["currency"] = format_currency


def _dropped_box(x: float, y: float, viewport_width: float | None, viewport_height: float | None):
    """Offset of the stats box after a drag released at (x, y)."""
    events = [PointerEvent("down", x, y), PointerEvent("move", x, y), PointerEvent("up", x, y)]
    offset = replay_drag(events, STATS_BOX_WIDTH, STATS_BOX_HEIGHT).offset
    if viewport_width and viewport_height:
        offset = clamp_offset(offset, STATS_BOX_WIDTH, STATS_BOX_HEIGHT, viewport_width, viewport_height)
    return offset


def _view_state(
    search: str = "",
    month: int | None = None,
    page: int = 1,
    stats: bool = True,
    box_x: float | None = None,
    box_y: float | None = None,
    vw: float | None = None,
    vh: float | None = None,
) -> ViewState:
    view = ViewState(page_size=int(config["page_size"])).with_search(search).with_month(month).with_page(page)
    if not stats:
        view = view.hide_stats()
    if box_x is not None and box_y is not None:
        view = view.moved_to(_dropped_box(box_x, box_y, vw, vh))
    return view


def _view_url(view: ViewState, drag: dict) -> str:
    params = {
        "search": view.search,
        "month": view.month,
        "page": view.page,
        "stats": 1 if view.stats_visible else 0,
        **drag,
    }
    query = {key: value for key, value in params.items() if value not in (None, "")}
    return "/?" + urlencode(query)


def _error(message: str, status: int = 400) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status)


@app.get("/")
def index(
    request: Request,
    search: str = "",
    month: int | None = None,
    page: int = 1,
    stats: bool = True,
    box_x: float | None = None,
    box_y: float | None = None,
    vw: float | None = None,
    vh: float | None = None,
    message: str | None = None,
    error: str | None = None,
):
    provider.ensure_loaded()
    try:
        view = _view_state(search, month, page, stats, box_x, box_y, vw, vh)
    except ValueError as exc:
        error = str(exc)
        view = _view_state(search)
    dashboard = build_dashboard(provider.transactions, view, config["price_thresholds"])
    current = view.with_page(dashboard.page)
    drag = {"box_x": box_x, "box_y": box_y, "vw": vw, "vh": vh}

    peak = max((bucket.count for bucket in dashboard.price_ranges), default=0)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "dashboard": dashboard,
            "view": current,
            "months": [
                (number, month_name(number), _view_url(current.with_month(number), drag))
                for number in range(1, 13)
            ],
            "peak": peak,
            "previous_url": _view_url(current.previous_page(), drag),
            "next_url": _view_url(current.next_page(dashboard.total_pages), drag),
            "close_url": _view_url(current.hide_stats(), drag),
            "loading": provider.is_loading,
            "fetch_error": provider.error,
            "message": message,
            "error": error,
            "box_width": STATS_BOX_WIDTH,
            "box_height": STATS_BOX_HEIGHT,
        },
    )


@app.get("/api/transactions")
def api_transactions(search: str = "", month: int | None = None, page: int = 1, per_page: int | None = None):
    provider.ensure_loaded()
    try:
        view = _view_state(search, month, page)
        listed = search_transactions(filter_transactions_by_month(provider.transactions, view.month), view.search)
        result = paginate(listed, view.page, per_page or view.page_size)
    except ValueError as exc:
        return _error(str(exc))
    return {
        "page": result.page,
        "total_pages": result.total_pages,
        "total": result.total,
        "transactions": [transaction_to_dict(tx) for tx in result.items],
    }


@app.get("/api/price-ranges")
def api_price_ranges(month: int | None = None):
    provider.ensure_loaded()
    try:
        view = _view_state(month=month)
    except ValueError as exc:
        return _error(str(exc))
    monthly = aggregate(provider.transactions, view.month, config["price_thresholds"])
    return [bucket.as_dict() for bucket in monthly.price_ranges]


@app.get("/api/statistics")
def api_statistics(month: int | None = None):
    provider.ensure_loaded()
    try:
        view = _view_state(month=month)
    except ValueError as exc:
        return _error(str(exc))
    monthly = aggregate(provider.transactions, view.month, config["price_thresholds"])
    return monthly.summary.as_dict()


@app.get("/api/status")
def api_status():
    return provider.status_payload()


@app.post("/reload")
def reload_transactions():
    try:
        status = provider.load()
    except RuntimeError as exc:
        return RedirectResponse(f"/?error={quote(str(exc))}", status_code=303)
    if status.error:
        return RedirectResponse(f"/?error={quote(status.error)}", status_code=303)
    return RedirectResponse(f"/?message={quote(f'Loaded {status.count} transactions')}", status_code=303)
