# =======================================================================================
# checkin/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *
from .enums import *

__all__ = [
    "CheckInRequest", "CheckInResponse", "RegisterAttendeeRequest", "AttendeeInfo",
    "LogItem", "AttendeeDetail", "RankingItem", "GrowthScoreRequest", "GrowthScoreResponse",
    "SettingsView", "SettingsUpdate", "SettingKey", "SortOrder", "LogSortField",
    "AttendeeSortField", "GrowthTierCode",
]
