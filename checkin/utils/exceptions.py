# =======================================================================================
# checkin/utils/exceptions.py - Custom Exceptions
# =======================================================================================
class CheckInServiceError(Exception):
    """Base exception for the check-in service."""
    status_code = 400


class InvalidInputError(CheckInServiceError):
    """Raised when submitted values fail validation."""
    status_code = 400


class SessionInactiveError(CheckInServiceError):
    """Raised when check-in is attempted while the session is closed."""
    status_code = 403


class LocationRequiredError(CheckInServiceError):
    """Raised when the geofence is on but no coordinates were sent."""
    status_code = 400


class OutsideGeofenceError(CheckInServiceError):
    """Raised when the submitted location is outside the allowed radius."""
    status_code = 403

    def __init__(self, message: str, distance_m: float, radius_m: float):
        super().__init__(message)
        self.distance_m = distance_m
        self.radius_m = radius_m


class AttendeeNotFoundError(CheckInServiceError):
    """Raised when an attendee is not found."""
    status_code = 404


class LogNotFoundError(CheckInServiceError):
    """Raised when an attendance log row is not found."""
    status_code = 404


class DuplicateAttendeeError(CheckInServiceError):
    """Raised when a (name, phone) pair is already taken."""
    status_code = 409


class AdminAuthError(CheckInServiceError):
    """Raised when the admin password or session is invalid."""
    status_code = 401
