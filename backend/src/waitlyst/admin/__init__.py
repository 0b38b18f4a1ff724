"""Admin gate and dashboard helpers."""

from waitlyst.admin.dashboard import DashboardStats, dashboard_stats, filter_entries
from waitlyst.admin.gate import AdminGate

__all__ = ["AdminGate", "DashboardStats", "dashboard_stats", "filter_entries"]
