# =======================================================================================
# checkin/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *
from .validators import *

__all__ = [
    "CheckInServiceError", "InvalidInputError", "SessionInactiveError", "LocationRequiredError",
    "OutsideGeofenceError", "AttendeeNotFoundError", "LogNotFoundError", "DuplicateAttendeeError",
    "AdminAuthError", "normalize_name", "normalize_phone", "validate_coordinates",
]
