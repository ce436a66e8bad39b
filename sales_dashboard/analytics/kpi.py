from __future__ import annotations

import math
import sys
from typing import Mapping, Optional, Set, Union

from sales_dashboard.models.sales import DayAggregate, RangeSeries, SalesRecord
from sales_dashboard.schemas.dashboard import PeriodSummary

DEFAULT_GOALS: Mapping[str, float] = {"FT": 6.5, "PT": 4.0}

PERCENT_DISPLAY_MIN = 0.0
PERCENT_DISPLAY_MAX = 200.0

Period = Union[DayAggregate, RangeSeries]


def bounded(value: float) -> float:
    """Keep arithmetic results finite: NaN becomes 0, infinities the largest float."""
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        return sys.float_info.max if value > 0 else -sys.float_info.max
    return value


def default_goal_for(
    status: Optional[str], goals: Mapping[str, float] = DEFAULT_GOALS
) -> Optional[float]:
    if status is None:
        return None
    goal = goals.get(status)
    return goal if goal is not None and goal > 0 else None


def day_percent(goal: float, total_sales: float) -> float:
    return bounded(total_sales / goal * 100) if goal > 0 else 0.0


def agent_percent(
    record: SalesRecord, goals: Mapping[str, float] = DEFAULT_GOALS
) -> Optional[float]:
    """KPI achievement for one agent, or ``None`` when no goal is derivable.

    A finite precomputed ``percent`` from upstream is trusted verbatim.
    ``None`` means "unknown" and must not be read as 0% achieved.
    """
    if record.percent is not None and math.isfinite(record.percent):
        return record.percent
    effective_goal = record.goal if record.goal is not None else default_goal_for(record.status, goals)
    if effective_goal is None or effective_goal <= 0:
        return None
    return bounded(record.sales / effective_goal * 100)


def period_summary(period: Period) -> PeriodSummary:
    days = (period,) if isinstance(period, DayAggregate) else period.days

    total_sales = 0.0
    agents: Set[str] = set()
    daily_counts = []
    for day in days:
        day_agents: Set[str] = set()
        for record in day.records:
            total_sales = bounded(total_sales + record.sales)
            day_agents.add(record.agent)
        agents.update(day_agents)
        daily_counts.append(len(day_agents))

    total_agents = len(agents)
    return PeriodSummary(
        total_sales=total_sales,
        total_agents=total_agents,
        avg_per_agent=bounded(total_sales / total_agents) if total_agents else 0.0,
        avg_daily_agents=(sum(daily_counts) / len(daily_counts)) if daily_counts else 0.0,
    )


def round_percent(value: float) -> float:
    return round(value, 1)


def clamp_percent(value: float) -> float:
    return max(PERCENT_DISPLAY_MIN, min(PERCENT_DISPLAY_MAX, value))


def display_percent(value: Optional[float]) -> Optional[float]:
    # Charting only; stored percentages are never clamped.
    if value is None:
        return None
    return round_percent(clamp_percent(value))
