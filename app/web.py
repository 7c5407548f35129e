from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from datastore.sql_store import RecordStore, build_default_store
from services.aggregator import Aggregator


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_store() -> RecordStore:
    return build_default_store()


def get_aggregator() -> Aggregator:
    return Aggregator()


def _bar_widths(data: list[float]) -> list[float]:
    """Scale chart values to percentages of the largest value."""
    peak = max((value for value in data if value > 0), default=0.0)
    if not peak:
        return [0.0 for _ in data]
    return [max(value, 0.0) / peak * 100 for value in data]


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
def ui_index(
    request: Request,
    store: RecordStore = Depends(get_store),
    aggregator: Aggregator = Depends(get_aggregator),
) -> HTMLResponse:
    devices = store.list_devices()
    consumptions = store.list_consumptions()
    summaries = aggregator.summarize(devices, consumptions)
    chart = aggregator.chart(devices, consumptions)
    bars = list(zip(chart.labels, chart.data, _bar_widths(chart.data)))
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "summaries": summaries,
            "chart": chart,
            "bars": bars,
        },
    )
