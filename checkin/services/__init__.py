# =======================================================================================
# checkin/services/__init__.py - Services Package
# =======================================================================================
from .checkin_service import CheckInService
from .attendee_service import AttendeeService
from .auth_service import AuthService
from .dashboard_service import DashboardService
from .ranking_service import RankingService
from .settings_service import SettingsService

__all__ = [
    "CheckInService", "AttendeeService", "AuthService",
    "DashboardService", "RankingService", "SettingsService",
]
