from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query

from sales_dashboard.api.dependencies import get_dashboard_service
from sales_dashboard.schemas.dashboard import (
    DayViewFilters,
    DayViewResponse,
    RangeViewFilters,
    RangeViewResponse,
)
from sales_dashboard.services.dashboard_service import DashboardService
from sales_dashboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_range_view_filters(
    sort_by: str = Query(default="sales", pattern="^(agent|sales|percent)$"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    top_n: int | None = Query(default=None, ge=1, le=50),
) -> RangeViewFilters:
    return RangeViewFilters(sort_by=sort_by, sort_order=sort_order, top_n=top_n)


def get_day_view_filters(
    sort_by: str = Query(default="percent", pattern="^(agent|sales|percent)$"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
) -> DayViewFilters:
    return DayViewFilters(sort_by=sort_by, sort_order=sort_order)


@router.post("/range")
def dashboard_range_view(
    payload: Dict[str, Any] = Body(...),
    filters: RangeViewFilters = Depends(get_range_view_filters),
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[RangeViewResponse]:
    data = service.get_range_view(payload, filters)
    meta = build_meta(f"{len(data.top_agents.rows)}d", degraded=data.degraded)
    return ResponseEnvelope(data=data, meta=meta)


@router.post("/day")
def dashboard_day_view(
    payload: Dict[str, Any] = Body(...),
    filters: DayViewFilters = Depends(get_day_view_filters),
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[DayViewResponse]:
    data = service.get_day_view(payload, filters)
    meta = build_meta(data.date or "day", degraded=data.degraded)
    return ResponseEnvelope(data=data, meta=meta)
