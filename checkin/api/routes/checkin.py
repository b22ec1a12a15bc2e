# =======================================================================================
# checkin/api/routes/checkin.py - Check-In Endpoints
# =======================================================================================
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.engine import Connection

from ...models.schemas import (
    CheckInRequest,
    CheckInResponse,
    PublicSettings,
    RegisterAttendeeRequest,
    RegisterAttendeeResponse,
)
from ...config import config
from ...services.checkin_service import CheckInService
from ...services.qr_service import make_qr_png
from ...services.settings_service import SettingsService
from ...utils.exceptions import CheckInServiceError
from ..dependencies import get_db_connection

router = APIRouter()
checkin_service = CheckInService()
settings_service = SettingsService()


@router.post("/check-in", response_model=CheckInResponse)
def check_in(request: CheckInRequest, conn: Connection = Depends(get_db_connection)):
    """Log attendance for name + phone; repeated within the window reports already_checked."""
    try:
        return checkin_service.check_in(
            conn, request.name, request.phone, request.latitude, request.longitude
        )
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/settings/public", response_model=PublicSettings)
def public_settings(conn: Connection = Depends(get_db_connection)):
    """What the check-in form needs before submitting (ask for location or not)."""
    settings = settings_service.get_settings(conn)
    return PublicSettings(
        meeting_title=config.MEETING_TITLE,
        session_active=settings.session_active,
        geofence_enabled=settings.geofence_enabled,
    )


@router.post("/attendees/register", response_model=RegisterAttendeeResponse)
def register_attendee(request: RegisterAttendeeRequest, conn: Connection = Depends(get_db_connection)):
    try:
        info = checkin_service.register_attendee(conn, request.name, request.phone)
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return RegisterAttendeeResponse(success=True, data=info)


@router.get("/attendees/{attendee_id}/pass.png")
def attendee_pass(attendee_id: str, conn: Connection = Depends(get_db_connection)):
    """Personal pass: QR holding only the attendee UUID."""
    try:
        attendee = checkin_service.get_attendee(conn, attendee_id)
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return Response(content=make_qr_png(attendee["id"], box_size=8, border=2), media_type="image/png")
