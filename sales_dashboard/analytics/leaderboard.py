from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence, Union

from sales_dashboard.analytics.kpi import DEFAULT_GOALS, agent_percent, round_percent
from sales_dashboard.models.sales import SalesRecord
from sales_dashboard.schemas.dashboard import RankedRow

SORT_KEYS = ("agent", "sales", "percent")
SORT_ORDERS = ("asc", "desc")


def rank_records(
    records: Iterable[SalesRecord],
    sort_by: str = "sales",
    sort_order: str = "desc",
    goals: Mapping[str, float] = DEFAULT_GOALS,
) -> List[RankedRow]:
    rows = []
    for index, record in enumerate(records):
        percent = agent_percent(record, goals)
        rows.append(
            RankedRow(
                rank=index,
                agent=record.agent,
                sales=record.sales,
                percent=percent,
                display_percent=round_percent(percent) if percent is not None else None,
            )
        )
    return sort_rows(rows, sort_by, sort_order)


def sort_rows(
    rows: Sequence[RankedRow], sort_by: str = "sales", sort_order: str = "desc"
) -> List[RankedRow]:
    """Return a new ranking; the input sequence is left as it was.

    Equal keys keep their input order in both directions, so sorting an
    already sorted ranking by the same key is a no-op.
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unsupported sort key: {sort_by}")
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"Unsupported sort order: {sort_order}")

    ordered = sorted(
        rows,
        key=lambda row: _sort_value(row, sort_by),
        reverse=sort_order == "desc",
    )
    return [row.model_copy(update={"rank": index}) for index, row in enumerate(ordered)]


def _sort_value(row: RankedRow, sort_by: str) -> Union[str, float]:
    if sort_by == "agent":
        return row.agent.casefold()
    if sort_by == "percent":
        # Missing percent orders as 0; the row itself keeps None.
        return row.percent if row.percent is not None else 0.0
    return row.sales
