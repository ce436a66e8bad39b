from __future__ import annotations

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from sales_dashboard.api.dependencies import get_dashboard_service
from sales_dashboard.main import create_app
from sales_dashboard.services.dashboard_service import DashboardService


@pytest.fixture()
def range_payload() -> Dict[str, Any]:
    return {
        "ok": True,
        "updatedAt": "2026-10-17T18:00:00Z",
        "salesPerDay": [
            {"date": "10-15-2026", "sales": 4},
            {"date": "10-16-2026", "sales": 5},
            {"date": "10-17-2026", "sales": 9},
        ],
        "agentDaily": [
            {
                "date": "10-15-2026",
                "byAgent": [
                    {"agent": "Avery", "sales": 3, "status": "FT"},
                    {"agent": "Blake", "sales": 1, "status": "PT"},
                ],
            },
            {"date": "10-16-2026", "byAgent": [{"agent": "Blake", "sales": 5, "status": "PT"}]},
            {
                "date": "10-17-2026",
                "byAgent": [
                    {"agent": "Avery", "sales": 2, "status": "FT"},
                    {"agent": "Casey", "sales": 7},
                ],
            },
        ],
        "agentLeaderboard": [
            {"agent": "Casey", "sales": 7},
            {"agent": "Blake", "sales": 6},
            {"agent": "Avery", "sales": 5},
        ],
        "totalSales": 18,
        "totalAgents": 3,
        "avgPerAgent": 6,
        "avgDailyAgents": 1.67,
    }


@pytest.fixture()
def day_payload() -> Dict[str, Any]:
    return {
        "ok": True,
        "date": "10-17-2026",
        "perAgentKPI": [
            {"agent": "A", "sales": 5, "status": "FT"},
            {"agent": "B", "sales": 2, "status": "PT"},
            {"agent": "C", "sales": 3},
        ],
        "totalKPI": 10,
        "dayGoal": 20,
        "note": "Sheet synced",
    }


@pytest.fixture()
def client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_dashboard_service] = lambda: DashboardService(top_n=2)
    return TestClient(app)
