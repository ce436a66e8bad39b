from __future__ import annotations


def test_range_view(client, range_payload):
    response = client.post("/api/v1/dashboard/range", json=range_payload)
    assert response.status_code == 200
    payload = response.json()
    data = payload["data"]
    assert data["summary"]["totalSales"] == 18
    assert data["summary"]["avgPerAgent"] == 6
    assert data["topAgents"]["trackedAgents"] == ["Casey", "Blake"]
    assert data["topAgents"]["rows"][1]["salesByAgent"] == {"Casey": 0, "Blake": 5}
    assert [row["agent"] for row in data["leaderboard"]] == ["Casey", "Blake", "Avery"]
    assert data["leaderboard"][0]["rank"] == 0
    assert payload["meta"]["timeWindow"] == "3d"
    assert payload["meta"]["degraded"] is False


def test_range_view_query_parameters(client, range_payload):
    response = client.post(
        "/api/v1/dashboard/range?sort_by=sales&sort_order=asc&top_n=1", json=range_payload
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert [row["agent"] for row in data["leaderboard"]] == ["Avery", "Blake", "Casey"]
    assert data["topAgents"]["trackedAgents"] == ["Casey"]
    assert data["sortOrder"] == "asc"


def test_failed_upstream_payload_is_degraded_not_an_error(client):
    response = client.post(
        "/api/v1/dashboard/range",
        json={"ok": False, "status": 502, "hint": "Upstream returned non-JSON"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["meta"]["degraded"] is True
    assert payload["data"]["error"] == "Upstream returned non-JSON"
    assert payload["data"]["summary"]["totalAgents"] == 0


def test_day_view(client, day_payload):
    response = client.post("/api/v1/dashboard/day", json=day_payload)
    assert response.status_code == 200
    payload = response.json()
    data = payload["data"]
    assert data["date"] == "10-17-2026"
    assert data["kpiSummary"]["dayPercent"] == 50
    assert [row["agent"] for row in data["leaderboard"]] == ["A", "B", "C"]
    assert data["leaderboard"][2]["percent"] is None
    assert data["agentKpi"][0] == {
        "agent": "A",
        "sales": 5,
        "goal": None,
        "status": "FT",
        "percent": 76.9,
    }
    assert payload["meta"]["timeWindow"] == "10-17-2026"


def test_invalid_sort_key_returns_error_envelope(client, day_payload):
    response = client.post("/api/v1/dashboard/day?sort_by=revenue", json=day_payload)
    assert response.status_code == 422
    payload = response.json()
    assert payload["error"]["code"] == "validation_error"


def test_non_object_body_returns_error_envelope(client):
    response = client.post("/api/v1/dashboard/day", json=[1, 2, 3])
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"


def test_range_view_survives_out_of_range_numbers(client, range_payload):
    range_payload["totalSales"] = 10**400
    range_payload["agentDaily"][0]["byAgent"][0]["sales"] = 10**400
    response = client.post("/api/v1/dashboard/range", json=range_payload)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["reportedSummary"]["totalSales"] == 0
    assert data["summary"]["totalSales"] == 15


def test_day_view_tiny_goal_percent_is_not_null(client):
    response = client.post(
        "/api/v1/dashboard/day",
        json={"perAgentKPI": [{"agent": "A", "sales": 1, "goal": 1e-320}]},
    )
    assert response.status_code == 200
    row = response.json()["data"]["leaderboard"][0]
    assert row["percent"] is not None
    assert row["percent"] > 1e300
