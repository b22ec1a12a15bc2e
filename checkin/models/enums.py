# =======================================================================================
# checkin/models/enums.py - Enums and Constants
# =======================================================================================
from enum import Enum
from typing import Literal

# Type aliases for better type hints
SortOrder = Literal["asc", "desc"]
LogSortField = Literal["created_at", "name"]
AttendeeSortField = Literal["name", "created_at", "attendance_days"]
GrowthTierCode = Literal["S", "PASS", "FAIL"]

BibleScore = Literal[20, 15, 10, 5]
PrayerScore = Literal[15, 8, 0]
EvaluationScore = Literal[10, 7, 3]


class SettingKey(str, Enum):
    """Keys of the settings table."""
    SESSION_ACTIVE = "session_active"
    GEOFENCE_ENABLED = "geofence_enabled"
    CHURCH_LAT = "church_lat"
    CHURCH_LNG = "church_lng"
    GEOFENCE_RADIUS_M = "geofence_radius_m"
    CHECK_IN_BASE_URL = "check_in_base_url"
