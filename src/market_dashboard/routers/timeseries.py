"""Intraday time-series chart endpoints consumed by the dashboard UI."""
from __future__ import annotations

from datetime import date
import logging
from typing import Any, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import AliasChoices, BaseModel, Field

from ..core.chart import render_chart, tooltip_at
from ..core.models import ChartDescription, EmptyChart, Sample, Tooltip
from ..errors import InvalidReferenceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chart", tags=["chart"])


class TimeSeriesRequest(BaseModel):
    samples: list[Sample] = Field(default_factory=list)
    pre_close: float = Field(..., validation_alias=AliasChoices("pre_close", "preClose"))
    stock_name: Optional[str] = Field(None, validation_alias=AliasChoices("stock_name", "stockName"))
    stock_code: Optional[str] = Field(None, validation_alias=AliasChoices("stock_code", "stockCode"))
    style: dict[str, Any] = Field(default_factory=dict)


class TooltipRequest(BaseModel):
    samples: list[Sample]
    pre_close: float = Field(..., validation_alias=AliasChoices("pre_close", "preClose"))
    index: int
    series: Optional[list[str]] = None
    session_date: Optional[date] = None


@router.post("/timeseries", response_model=Union[ChartDescription, EmptyChart])
async def timeseries_chart(payload: TimeSeriesRequest):
    """
    Build the chart description for one symbol's intraday series.

    Returns an ``empty`` marker when no samples are supplied; a non-positive
    previous close is rejected with 422.
    """
    try:
        return render_chart(
            payload.samples,
            payload.pre_close,
            stock_name=payload.stock_name,
            stock_code=payload.stock_code,
            style=payload.style,
        )
    except InvalidReferenceError as exc:
        logger.warning(f"Rejected time-series chart request: {exc}")
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/timeseries/tooltip", response_model=Tooltip)
async def timeseries_tooltip(payload: TooltipRequest):
    try:
        description = render_chart(payload.samples, payload.pre_close)
    except InvalidReferenceError as exc:
        logger.warning(f"Rejected tooltip request: {exc}")
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if isinstance(description, EmptyChart):
        raise HTTPException(status_code=404, detail="no samples")
    try:
        return tooltip_at(description, payload.index, series=payload.series, session_date=payload.session_date)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
