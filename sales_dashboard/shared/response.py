from __future__ import annotations

from datetime import date
from typing import Generic, Optional, TypeVar

from sales_dashboard.shared.base import BaseSchema


T = TypeVar("T")


class Meta(BaseSchema):
    as_of_date: str
    source: str
    time_window: str
    calculation_version: str
    degraded: Optional[bool] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    meta: Optional[Meta] = None


def build_meta(time_window: str, degraded: Optional[bool] = None, source: str = "upstream_payload") -> Meta:
    return Meta(
        as_of_date=date.today().isoformat(),
        source=source,
        time_window=time_window,
        calculation_version="v1",
        degraded=degraded,
    )
