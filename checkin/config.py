# =======================================================================================
# checkin/config.py - Configuration Management
# =======================================================================================
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    """Helper to parse boolean environment variables."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    """Helper to parse optional float environment variables."""
    v = os.getenv(name)
    if not v:
        return None
    try:
        return float(v)
    except ValueError:
        return None


class Config:
    # Database
    DB_URL: str = os.getenv("DB_URL", "sqlite:///./checkin.db")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "20"))

    # API Settings
    API_DEBUG: bool = _env_bool("API_DEBUG")
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Admin session
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "2026prayer")
    ADMIN_COOKIE_NAME: str = os.getenv("ADMIN_COOKIE_NAME", "admin_auth")
    ADMIN_COOKIE_SECURE: bool = _env_bool("ADMIN_COOKIE_SECURE", "true")

    # Check-in behaviour
    TZ_OFFSET_HOURS: int = int(os.getenv("TZ_OFFSET_HOURS", "9"))
    DUPLICATE_WINDOW_MINUTES: int = int(os.getenv("DUPLICATE_WINDOW_MINUTES", "60"))
    RECENT_LOG_LIMIT: int = int(os.getenv("RECENT_LOG_LIMIT", "100"))
    MEETING_TITLE: str = os.getenv("MEETING_TITLE", "2026 주중기도회")

    # QR target; falls back to the request's own base URL when unset
    PUBLIC_BASE_URL: Optional[str] = os.getenv("PUBLIC_BASE_URL") or None

    # Geofence defaults (overridden by rows in the settings table)
    CHURCH_LAT: Optional[float] = _env_float("CHURCH_LAT")
    CHURCH_LNG: Optional[float] = _env_float("CHURCH_LNG")
    GEOFENCE_RADIUS_M: float = float(os.getenv("GEOFENCE_RADIUS_M", "300"))


config = Config()
