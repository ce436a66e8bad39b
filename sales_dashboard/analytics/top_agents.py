from __future__ import annotations

from typing import Dict, List

from sales_dashboard.analytics.kpi import bounded
from sales_dashboard.models.sales import RangeSeries
from sales_dashboard.schemas.dashboard import TopAgentsRow, TopAgentsSeries

DEFAULT_TOP_N = 6


def agent_totals(series: RangeSeries) -> Dict[str, float]:
    """Sales per agent across the whole series, keyed in first-seen order."""
    totals: Dict[str, float] = {}
    for day in series.days:
        for record in day.records:
            totals[record.agent] = bounded(totals.get(record.agent, 0.0) + record.sales)
    return totals


def group_top_agents(series: RangeSeries, n: int = DEFAULT_TOP_N) -> TopAgentsSeries:
    """Per-day sales restricted to the ``n`` highest-total agents.

    Ties on total keep first appearance in the series. Every row carries a
    value for each tracked agent, 0 on days the agent has no record. The
    result is for stacked charts only; totals come from ``period_summary``.
    """
    if n < 1:
        raise ValueError("n must be at least 1")

    totals = agent_totals(series)
    # sorted() is stable, so equal totals keep insertion (first-seen) order.
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    tracked: List[str] = [agent for agent, _ in ranked[:n]]

    rows: List[TopAgentsRow] = []
    for day in series.days:
        sales_by_agent = {record.agent: record.sales for record in day.records}
        rows.append(
            TopAgentsRow(
                date=day.date,
                sales_by_agent={agent: sales_by_agent.get(agent, 0.0) for agent in tracked},
            )
        )
    return TopAgentsSeries(tracked_agents=tracked, rows=rows)
