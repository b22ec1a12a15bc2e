# =======================================================================================
# checkin/services/checkin_service.py - Core Check-In Logic
# =======================================================================================
import logging
import uuid
from datetime import timedelta
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection

from ..config import config
from ..models.schemas import AttendeeInfo, CheckInResponse
from ..utils.exceptions import AttendeeNotFoundError, CheckInServiceError, SessionInactiveError
from ..utils.timeutils import parse_iso, to_iso, utc_now
from ..utils.validators import normalize_name, normalize_phone, validate_coordinates
from .geofence import check_geofence
from .settings_service import SettingsService

logger = logging.getLogger(__name__)

MSG_CHECKED_IN = "출석이 완료되었습니다!"
MSG_ALREADY_CHECKED = "이미 출석체크 되었습니다."
MSG_SESSION_INACTIVE = "현재 출석체크 시간이 아닙니다."


class CheckInService:
    """Handles attendee identity and the check-in pipeline."""

    def __init__(self, settings_service: SettingsService = None):
        self.settings_service = settings_service or SettingsService()

    @staticmethod
    def find_attendee(conn: Connection, name: str, phone: str) -> Optional[Dict[str, Any]]:
        row = conn.execute(
            text("SELECT id, name, phone, created_at FROM attendees WHERE name = :name AND phone = :phone"),
            {"name": name, "phone": phone},
        ).mappings().first()
        return dict(row) if row else None

    @staticmethod
    def get_attendee(conn: Connection, attendee_id: str) -> Dict[str, Any]:
        row = conn.execute(
            text("SELECT id, name, phone, created_at FROM attendees WHERE id = :id"),
            {"id": attendee_id},
        ).mappings().first()
        if not row:
            raise AttendeeNotFoundError("등록되지 않은 참석자입니다.")
        return dict(row)

    def ensure_attendee(self, conn: Connection, name: str, phone: str) -> Dict[str, Any]:
        """Find the attendee keyed by (name, phone) or create one with a fresh UUID."""
        existing = self.find_attendee(conn, name, phone)
        if existing:
            return existing

        attendee = {
            "id": str(uuid.uuid4()),
            "name": name,
            "phone": phone,
            "created_at": to_iso(utc_now()),
        }
        conn.execute(
            text("""
                INSERT INTO attendees (id, name, phone, created_at)
                VALUES (:id, :name, :phone, :created_at)
            """),
            attendee,
        )
        logger.info("New attendee registered: %s (%s)", name, phone)
        return attendee

    @staticmethod
    def latest_log_time(conn: Connection, attendee_id: str) -> Optional[str]:
        row = conn.execute(
            text("""
                SELECT created_at FROM attendance_logs
                WHERE attendee_id = :aid
                ORDER BY created_at DESC
                LIMIT 1
            """),
            {"aid": attendee_id},
        ).mappings().first()
        return row["created_at"] if row else None

    def register_attendee(self, conn: Connection, name: str, phone: str) -> AttendeeInfo:
        attendee = self.ensure_attendee(conn, normalize_name(name), normalize_phone(phone))
        return AttendeeInfo(id=attendee["id"], name=attendee["name"], phone=attendee["phone"])

    def check_in(
        self,
        conn: Connection,
        name: str,
        phone: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> CheckInResponse:
        """
        Process a check-in through the complete validation pipeline:
        - Normalizes name / phone
        - Rejects while the session toggle is off
        - Enforces the geofence when enabled
        - Finds or creates the attendee
        - Skips the insert when the attendee checked in within the duplicate window
        - Inserts the attendance log row
        Rejections raise before anything is written.
        """
        name = normalize_name(name)
        phone = normalize_phone(phone)
        validate_coordinates(latitude, longitude)

        settings = self.settings_service.get_settings(conn)
        if not settings.session_active:
            logger.info("Check-in rejected (session closed): %s", name)
            raise SessionInactiveError(MSG_SESSION_INACTIVE)

        try:
            distance = check_geofence(settings, latitude, longitude)
        except CheckInServiceError as e:
            logger.info("Check-in rejected for %s: %s", name, e)
            raise

        attendee = self.ensure_attendee(conn, name, phone)
        attendee_id = attendee["id"]
        now = utc_now()

        last = self.latest_log_time(conn, attendee_id)
        if last is not None:
            last_dt = parse_iso(last)
            if now - last_dt < timedelta(minutes=config.DUPLICATE_WINDOW_MINUTES):
                logger.info("Duplicate check-in ignored: %s (%s)", name, phone)
                return CheckInResponse(
                    success=True,
                    message=MSG_ALREADY_CHECKED,
                    already_checked=True,
                    attendee_id=attendee_id,
                    checked_at=last_dt,
                )

        conn.execute(
            text("""
                INSERT INTO attendance_logs
                    (attendee_id, name, phone, latitude, longitude, distance_m, created_at)
                VALUES (:aid, :name, :phone, :lat, :lng, :dist, :ts)
            """),
            {
                "aid": attendee_id, "name": name, "phone": phone,
                "lat": latitude, "lng": longitude, "dist": distance,
                "ts": to_iso(now),
            },
        )
        logger.info("Checked in: %s (%s)", name, phone)

        return CheckInResponse(
            success=True,
            message=MSG_CHECKED_IN,
            already_checked=False,
            attendee_id=attendee_id,
            checked_at=now,
            distance_m=round(distance, 1) if distance is not None else None,
        )
