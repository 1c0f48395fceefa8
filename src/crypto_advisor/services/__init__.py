"""Service layer: orchestration of providers and stores."""
from crypto_advisor.services.dashboard import DashboardService

__all__ = ["DashboardService"]
