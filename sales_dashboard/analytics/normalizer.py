from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from sales_dashboard.analytics.kpi import bounded
from sales_dashboard.models.sales import (
    DailySales,
    DayAggregate,
    DayReport,
    RangeSeries,
    SalesRecord,
)

logger = logging.getLogger(__name__)

KNOWN_STATUSES = ("FT", "PT")


def normalize_range_payload(payload: Mapping[str, Any]) -> RangeSeries:
    """Coerce an upstream range query result into a total ``RangeSeries``.

    Missing or malformed fields degrade to zero/empty defaults. Only a payload
    that is not a mapping at all raises ``TypeError``.
    """
    _require_mapping(payload)
    days = tuple(normalize_day(item) for item in _as_list(payload.get("agentDaily")))
    sales_per_day = tuple(
        DailySales(date=_to_key(item.get("date")), sales=_to_amount(item.get("sales")))
        for item in _as_list(payload.get("salesPerDay"))
        if isinstance(item, Mapping)
    )
    return RangeSeries(
        days=days,
        sales_per_day=sales_per_day,
        leaderboard=_normalize_records(payload.get("agentLeaderboard")),
        reported_total_sales=_to_amount(payload.get("totalSales")),
        reported_total_agents=_to_amount(payload.get("totalAgents")),
        reported_avg_per_agent=_to_amount(payload.get("avgPerAgent")),
        reported_avg_daily_agents=_to_amount(payload.get("avgDailyAgents")),
        updated_at=_to_optional_text(payload.get("updatedAt")),
        ok=_to_ok(payload),
        error=_error_text(payload),
    )


def normalize_day_payload(payload: Mapping[str, Any]) -> DayReport:
    """Coerce an upstream single-day query result into a total ``DayReport``."""
    _require_mapping(payload)
    day = DayAggregate(
        date=_to_key(payload.get("date")),
        records=_normalize_records(payload.get("perAgentKPI")),
    )
    return DayReport(
        day=day,
        total_kpi=_to_amount(payload.get("totalKPI")),
        day_goal=_to_amount(payload.get("dayGoal")),
        day_percent=_to_optional_number(payload.get("dayPercent")),
        note=_to_optional_text(payload.get("note")),
        ok=_to_ok(payload),
        error=_error_text(payload),
    )


def normalize_day(raw: Any) -> DayAggregate:
    if not isinstance(raw, Mapping):
        return DayAggregate()
    return DayAggregate(
        date=_to_key(raw.get("date")),
        records=_normalize_records(raw.get("byAgent")),
    )


def normalize_record(raw: Any) -> Optional[SalesRecord]:
    """Return a well-typed record, or ``None`` when no agent can be identified."""
    if not isinstance(raw, Mapping):
        return None
    agent = raw.get("agent")
    if not isinstance(agent, str) or not agent.strip():
        return None

    status = raw.get("status")
    status = status.strip().upper() if isinstance(status, str) else None
    goal = _to_optional_number(raw.get("goal"))
    return SalesRecord(
        agent=agent,
        sales=max(_to_amount(raw.get("sales")), 0.0),
        status=status if status in KNOWN_STATUSES else None,
        goal=goal if goal is not None and goal > 0 else None,
        percent=_to_optional_number(raw.get("percent")),
    )


def _normalize_records(value: Any) -> tuple[SalesRecord, ...]:
    merged: Dict[str, SalesRecord] = {}
    for raw in _as_list(value):
        record = normalize_record(raw)
        if record is None:
            logger.debug("Dropping unidentifiable sales record: %r", raw)
            continue
        existing = merged.get(record.agent)
        if existing is None:
            merged[record.agent] = record
            continue
        # Duplicate agent within one day: fold into the first occurrence.
        merged[record.agent] = existing.model_copy(
            update={"sales": bounded(existing.sales + record.sales), "percent": None}
        )
    return tuple(merged.values())


def _require_mapping(payload: Any) -> None:
    if not isinstance(payload, Mapping):
        raise TypeError(f"Dashboard payload must be a mapping, got {type(payload).__name__}")


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _to_optional_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = value
    elif isinstance(value, str):
        raw = value.strip()
    else:
        return None
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        # Integers past the float range are malformed, not fatal.
        return None
    return number if math.isfinite(number) else None


def _to_amount(value: Any) -> float:
    number = _to_optional_number(value)
    return number if number is not None else 0.0


def _to_key(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return str(value)
        except ValueError:
            # Integer too long to render as text.
            return ""
    return ""


def _to_optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _to_ok(payload: Mapping[str, Any]) -> bool:
    if "ok" not in payload:
        return True
    return bool(payload.get("ok"))


def _error_text(payload: Mapping[str, Any]) -> Optional[str]:
    return _to_optional_text(payload.get("error")) or _to_optional_text(payload.get("hint"))
