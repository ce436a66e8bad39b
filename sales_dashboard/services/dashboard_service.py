from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from sales_dashboard.analytics.kpi import (
    DEFAULT_GOALS,
    agent_percent,
    bounded,
    day_percent,
    display_percent,
    period_summary,
    round_percent,
)
from sales_dashboard.analytics.leaderboard import rank_records
from sales_dashboard.analytics.normalizer import normalize_day_payload, normalize_range_payload
from sales_dashboard.analytics.top_agents import DEFAULT_TOP_N, agent_totals, group_top_agents
from sales_dashboard.core.errors import BadRequestError
from sales_dashboard.models.sales import RangeSeries, SalesRecord
from sales_dashboard.schemas.dashboard import (
    AgentKpiBar,
    DailySalesPoint,
    DayKpiSummary,
    DayViewFilters,
    DayViewResponse,
    PeriodSummary,
    RangeViewFilters,
    RangeViewResponse,
)

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(
        self,
        goals: Optional[Mapping[str, float]] = None,
        top_n: int = DEFAULT_TOP_N,
    ) -> None:
        self.goals: Dict[str, float] = dict(goals if goals is not None else DEFAULT_GOALS)
        self.top_n = top_n

    def get_range_view(
        self, payload: Mapping[str, Any], filters: RangeViewFilters
    ) -> RangeViewResponse:
        series = normalize_range_payload(payload)
        if not series.ok:
            logger.warning("Range payload flagged not ok: %s", series.error or "no detail")

        leaderboard_records = series.leaderboard or self._derive_leaderboard(series)
        try:
            top_agents = group_top_agents(series, filters.top_n or self.top_n)
            leaderboard = rank_records(
                leaderboard_records, filters.sort_by, filters.sort_order, self.goals
            )
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc

        return RangeViewResponse(
            updated_at=series.updated_at,
            summary=period_summary(series),
            reported_summary=self._reported_summary(series),
            sales_per_day=self._sales_per_day(series),
            top_agents=top_agents,
            leaderboard=leaderboard,
            sort_by=filters.sort_by,
            sort_order=filters.sort_order,
            degraded=not series.ok,
            error=series.error,
        )

    def get_day_view(self, payload: Mapping[str, Any], filters: DayViewFilters) -> DayViewResponse:
        report = normalize_day_payload(payload)
        if not report.ok:
            logger.warning("Day payload flagged not ok: %s", report.error or "no detail")

        records = report.day.records
        percent = report.day_percent
        if percent is None or not math.isfinite(percent):
            percent = day_percent(report.day_goal, report.total_kpi)

        try:
            leaderboard = rank_records(records, filters.sort_by, filters.sort_order, self.goals)
            sales_by_agent = rank_records(records, "sales", "desc", self.goals)
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc

        return DayViewResponse(
            date=report.day.date,
            note=report.note,
            summary=period_summary(report.day),
            kpi_summary=DayKpiSummary(
                day_goal=report.day_goal,
                total_sales=report.total_kpi,
                day_percent=percent,
                day_percent_display=round_percent(percent),
            ),
            agent_kpi=self._agent_kpi_bars(records),
            sales_by_agent=sales_by_agent,
            leaderboard=leaderboard,
            sort_by=filters.sort_by,
            sort_order=filters.sort_order,
            degraded=not report.ok,
            error=report.error,
        )

    def _agent_kpi_bars(self, records: tuple[SalesRecord, ...]) -> List[AgentKpiBar]:
        bars = [
            AgentKpiBar(
                agent=record.agent,
                sales=record.sales,
                goal=record.goal,
                status=record.status,
                percent=display_percent(agent_percent(record, self.goals)),
            )
            for record in records
        ]
        return sorted(
            bars,
            key=lambda bar: bar.percent if bar.percent is not None else 0.0,
            reverse=True,
        )

    @staticmethod
    def _reported_summary(series: RangeSeries) -> PeriodSummary:
        return PeriodSummary(
            total_sales=series.reported_total_sales,
            total_agents=int(max(series.reported_total_agents, 0.0)),
            avg_per_agent=series.reported_avg_per_agent,
            avg_daily_agents=series.reported_avg_daily_agents,
        )

    @staticmethod
    def _derive_leaderboard(series: RangeSeries) -> List[SalesRecord]:
        totals = agent_totals(series)
        return [SalesRecord(agent=agent, sales=sales) for agent, sales in totals.items()]

    @staticmethod
    def _sales_per_day(series: RangeSeries) -> List[DailySalesPoint]:
        if series.sales_per_day:
            return [DailySalesPoint(date=point.date, sales=point.sales) for point in series.sales_per_day]
        return [
            DailySalesPoint(date=day.date, sales=bounded(sum(record.sales for record in day.records)))
            for day in series.days
        ]
