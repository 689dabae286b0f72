from .dashboard_error import DashboardError

__all__ = [
    "DashboardError",
]
