from __future__ import annotations

import pytest

from sales_dashboard.analytics.leaderboard import rank_records, sort_rows
from sales_dashboard.models.sales import SalesRecord


def _records(*rows: tuple) -> list:
    return [SalesRecord(agent=agent, sales=sales, **extra) for agent, sales, extra in rows]


def test_sales_descending_keeps_tie_order() -> None:
    records = _records(("Z", 5, {}), ("A", 5, {}), ("B", 9, {}))
    ranked = rank_records(records, "sales", "desc")
    assert [(row.agent, row.sales) for row in ranked] == [("B", 9.0), ("Z", 5.0), ("A", 5.0)]
    assert [row.rank for row in ranked] == [0, 1, 2]


def test_sales_ascending_keeps_tie_order() -> None:
    records = _records(("Z", 5, {}), ("A", 5, {}), ("B", 1, {}))
    ranked = rank_records(records, "sales", "asc")
    assert [row.agent for row in ranked] == ["B", "Z", "A"]


def test_agent_sort_is_case_insensitive() -> None:
    records = _records(("bob", 1, {}), ("Alice", 1, {}), ("carl", 1, {}), ("Bea", 1, {}))
    ranked = rank_records(records, "agent", "asc")
    assert [row.agent for row in ranked] == ["Alice", "Bea", "bob", "carl"]


def test_percent_sort_treats_unknown_as_zero_for_ordering_only() -> None:
    records = _records(
        ("Unknown", 4, {}),
        ("Full", 2, {"status": "PT"}),
        ("Zero", 0, {"status": "FT"}),
        ("High", 13, {"status": "FT"}),
    )
    ranked = rank_records(records, "percent", "desc")
    assert [row.agent for row in ranked] == ["High", "Full", "Unknown", "Zero"]
    unknown = ranked[2]
    zero = ranked[3]
    assert unknown.percent is None
    assert unknown.display_percent is None
    assert zero.percent == 0.0
    assert ranked[0].percent == 200.0


def test_display_percent_is_rounded_not_clamped() -> None:
    ranked = rank_records(_records(("A", 5, {"status": "FT"}), ("B", 26, {"status": "FT"})), "agent", "asc")
    assert ranked[0].display_percent == 76.9
    assert ranked[1].display_percent == 400.0


def test_resorting_is_idempotent() -> None:
    records = _records(("Z", 5, {}), ("A", 5, {}), ("B", 9, {}), ("C", 5, {}))
    once = rank_records(records, "sales", "desc")
    twice = sort_rows(once, "sales", "desc")
    assert twice == once


def test_input_sequence_is_untouched() -> None:
    rows = rank_records(_records(("A", 1, {}), ("B", 2, {})), "agent", "asc")
    snapshot = list(rows)
    resorted = sort_rows(rows, "sales", "desc")
    assert rows == snapshot
    assert [row.agent for row in rows] == ["A", "B"]
    assert [row.agent for row in resorted] == ["B", "A"]
    assert [row.rank for row in rows] == [0, 1]


def test_empty_input() -> None:
    assert rank_records([], "sales", "desc") == []


@pytest.mark.parametrize("sort_by,sort_order", [("revenue", "desc"), ("sales", "down")])
def test_invalid_arguments_are_rejected(sort_by: str, sort_order: str) -> None:
    with pytest.raises(ValueError):
        rank_records(_records(("A", 1, {})), sort_by, sort_order)
