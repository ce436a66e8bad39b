from __future__ import annotations

from sales_dashboard.core.config import get_settings
from sales_dashboard.services.dashboard_service import DashboardService


def get_dashboard_service() -> DashboardService:
    settings = get_settings()
    return DashboardService(goals=settings.goal_table(), top_n=settings.default_top_n)
