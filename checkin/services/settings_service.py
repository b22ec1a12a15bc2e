# =======================================================================================
# checkin/services/settings_service.py - Key/Value Settings
# =======================================================================================
import logging
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection

from ..config import config
from ..models.enums import SettingKey
from ..models.schemas import SettingsUpdate, SettingsView
from ..utils.timeutils import to_iso, utc_now

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


def _as_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _as_float(raw: Optional[str], default: Optional[float]) -> Optional[float]:
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric setting value %r", raw)
        return default


def _to_raw(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SettingsService:
    """Reads and writes rows of the `settings` table."""

    def get_raw(self, conn: Connection) -> Dict[str, Optional[str]]:
        rows = conn.execute(text("SELECT setting_key, value FROM settings")).mappings().all()
        return {r["setting_key"]: r["value"] for r in rows}

    def get_settings(self, conn: Connection) -> SettingsView:
        """Stored values, falling back to config defaults for missing rows."""
        raw = self.get_raw(conn)
        return SettingsView(
            session_active=_as_bool(raw.get(SettingKey.SESSION_ACTIVE.value), True),
            geofence_enabled=_as_bool(raw.get(SettingKey.GEOFENCE_ENABLED.value), False),
            church_lat=_as_float(raw.get(SettingKey.CHURCH_LAT.value), config.CHURCH_LAT),
            church_lng=_as_float(raw.get(SettingKey.CHURCH_LNG.value), config.CHURCH_LNG),
            geofence_radius_m=_as_float(
                raw.get(SettingKey.GEOFENCE_RADIUS_M.value), config.GEOFENCE_RADIUS_M
            ),
            check_in_base_url=raw.get(SettingKey.CHECK_IN_BASE_URL.value) or None,
        )

    def set_value(self, conn: Connection, key: SettingKey, value: Any) -> None:
        """Upsert a single key (select, then update or insert)."""
        params = {"key": key.value, "value": _to_raw(value), "ts": to_iso(utc_now())}
        existing = conn.execute(
            text("SELECT setting_key FROM settings WHERE setting_key = :key"), {"key": key.value}
        ).first()
        if existing:
            conn.execute(
                text("UPDATE settings SET value = :value, updated_at = :ts WHERE setting_key = :key"),
                params,
            )
        else:
            conn.execute(
                text("INSERT INTO settings (setting_key, value, updated_at) VALUES (:key, :value, :ts)"),
                params,
            )

    def update_settings(self, conn: Connection, update: SettingsUpdate) -> SettingsView:
        changes = update.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field == SettingKey.CHECK_IN_BASE_URL.value and value:
                value = value.strip().rstrip("/")
            self.set_value(conn, SettingKey(field), value)
        if changes:
            logger.info("Settings updated: %s", ", ".join(sorted(changes)))
        return self.get_settings(conn)

    def set_session_active(self, conn: Connection, active: bool) -> SettingsView:
        self.set_value(conn, SettingKey.SESSION_ACTIVE, active)
        logger.info("Check-in session %s", "opened" if active else "closed")
        return self.get_settings(conn)
