# =======================================================================================
# checkin/__init__.py - Package Initialization
# =======================================================================================
"""
Prayer Meeting Check-In Service

Attendance check-in API for the weekday prayer meeting: attendees check in with
name and phone, optionally gated by a geofence and a session toggle, while the
admin side manages logs, attendees, rankings, settings and the entry QR code.
"""

__version__ = "1.0.0"
__author__ = "Prayer Meeting Check-In Team"
