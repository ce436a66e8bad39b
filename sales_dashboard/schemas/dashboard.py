from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import ConfigDict, Field

from sales_dashboard.shared.base import BaseSchema, FrozenSchema


class RangeViewFilters(BaseSchema):
    # Keep query parameter names in snake_case for API contract consistency.
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    sort_by: str = Field(default="sales", pattern="^(agent|sales|percent)$")
    sort_order: str = Field(default="desc", pattern="^(asc|desc)$")
    top_n: Optional[int] = Field(default=None, ge=1, le=50)


class DayViewFilters(BaseSchema):
    # Keep query parameter names in snake_case for API contract consistency.
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    sort_by: str = Field(default="percent", pattern="^(agent|sales|percent)$")
    sort_order: str = Field(default="desc", pattern="^(asc|desc)$")


class PeriodSummary(FrozenSchema):
    total_sales: float
    total_agents: int
    avg_per_agent: float
    avg_daily_agents: float


class RankedRow(FrozenSchema):
    rank: int
    agent: str
    sales: float
    percent: Optional[float] = None
    display_percent: Optional[float] = None


class TopAgentsRow(FrozenSchema):
    date: str
    sales_by_agent: Dict[str, float]


class TopAgentsSeries(FrozenSchema):
    tracked_agents: List[str]
    rows: List[TopAgentsRow]


class DailySalesPoint(BaseSchema):
    date: str
    sales: float


class AgentKpiBar(BaseSchema):
    agent: str
    sales: float
    goal: Optional[float] = None
    status: Optional[str] = None
    percent: Optional[float] = None


class DayKpiSummary(BaseSchema):
    day_goal: float
    total_sales: float
    day_percent: float
    day_percent_display: float


class RangeViewResponse(BaseSchema):
    updated_at: Optional[str] = None
    summary: PeriodSummary
    # Totals as the upstream sheet reported them, next to the recomputed summary.
    reported_summary: PeriodSummary
    sales_per_day: List[DailySalesPoint]
    top_agents: TopAgentsSeries
    leaderboard: List[RankedRow]
    sort_by: str
    sort_order: str
    degraded: bool = False
    error: Optional[str] = None


class DayViewResponse(BaseSchema):
    date: str
    note: Optional[str] = None
    summary: PeriodSummary
    kpi_summary: DayKpiSummary
    agent_kpi: List[AgentKpiBar]
    sales_by_agent: List[RankedRow]
    leaderboard: List[RankedRow]
    sort_by: str
    sort_order: str
    degraded: bool = False
    error: Optional[str] = None
