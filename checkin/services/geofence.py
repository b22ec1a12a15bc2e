# =======================================================================================
# checkin/services/geofence.py - Geofence Check
# =======================================================================================
import logging
from typing import Optional, Tuple

from geopy.distance import geodesic

from ..models.schemas import SettingsView
from ..utils.exceptions import LocationRequiredError, OutsideGeofenceError

logger = logging.getLogger(__name__)


def distance_m(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Geodesic distance in metres between two (lat, lng) points."""
    return geodesic(a, b).meters


def check_geofence(
    settings: SettingsView, latitude: Optional[float], longitude: Optional[float]
) -> Optional[float]:
    """
    Returns the distance to the church when the geofence applies, None otherwise.
    Raises when coordinates are missing or outside the configured radius.
    """
    if not settings.geofence_enabled:
        return None

    if settings.church_lat is None or settings.church_lng is None:
        logger.warning("Geofence enabled but church coordinates are not configured; skipping")
        return None

    if latitude is None or longitude is None:
        raise LocationRequiredError("위치 정보가 필요합니다. 위치 권한을 허용해주세요.")

    dist = distance_m((settings.church_lat, settings.church_lng), (latitude, longitude))
    radius = settings.geofence_radius_m
    if dist > radius:
        raise OutsideGeofenceError(
            f"교회 반경 {radius:.0f}m 안에서만 출석체크가 가능합니다. (현재 거리 약 {dist:.0f}m)",
            distance_m=dist,
            radius_m=radius,
        )
    return dist
