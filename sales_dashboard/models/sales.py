from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class FrozenRecord(BaseModel):
    model_config = ConfigDict(frozen=True)


class SalesRecord(FrozenRecord):
    agent: str
    sales: float = 0.0
    status: Optional[str] = None
    goal: Optional[float] = None
    percent: Optional[float] = None


class DayAggregate(FrozenRecord):
    date: str = ""
    records: Tuple[SalesRecord, ...] = ()


class DailySales(FrozenRecord):
    date: str = ""
    sales: float = 0.0


class RangeSeries(FrozenRecord):
    days: Tuple[DayAggregate, ...] = ()
    sales_per_day: Tuple[DailySales, ...] = ()
    leaderboard: Tuple[SalesRecord, ...] = ()
    reported_total_sales: float = 0.0
    reported_total_agents: float = 0.0
    reported_avg_per_agent: float = 0.0
    reported_avg_daily_agents: float = 0.0
    updated_at: Optional[str] = None
    ok: bool = True
    error: Optional[str] = None


class DayReport(FrozenRecord):
    day: DayAggregate = Field(default_factory=DayAggregate)
    total_kpi: float = 0.0
    day_goal: float = 0.0
    # Precomputed upstream; None when absent so it can be recomputed.
    day_percent: Optional[float] = None
    note: Optional[str] = None
    ok: bool = True
    error: Optional[str] = None
