# =======================================================================================
# checkin/api/routes/settings.py - Settings, Session Toggle and QR Endpoints
# =======================================================================================
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.engine import Connection

from ...models.schemas import QRLinkResponse, SessionToggleRequest, SettingsUpdate, SettingsView
from ...services.qr_service import check_in_url, make_qr_png, resolve_base_url
from ...services.settings_service import SettingsService
from ..dependencies import get_db_connection, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
settings_service = SettingsService()


def _qr_target(request: Request, base: Optional[str], conn: Connection) -> str:
    stored = settings_service.get_settings(conn).check_in_base_url
    return check_in_url(resolve_base_url(base, stored, str(request.base_url)))


@router.get("/admin/settings", response_model=SettingsView)
def get_settings(conn: Connection = Depends(get_db_connection)):
    return settings_service.get_settings(conn)


@router.put("/admin/settings", response_model=SettingsView)
def update_settings(request: SettingsUpdate, conn: Connection = Depends(get_db_connection)):
    return settings_service.update_settings(conn, request)


@router.post("/admin/session", response_model=SettingsView)
def toggle_session(request: SessionToggleRequest, conn: Connection = Depends(get_db_connection)):
    return settings_service.set_session_active(conn, request.active)


@router.get("/admin/qr", response_model=QRLinkResponse)
def get_qr_link(
    request: Request,
    base: Optional[str] = Query(None, max_length=255, description="Override the site address"),
    conn: Connection = Depends(get_db_connection),
):
    return QRLinkResponse(url=_qr_target(request, base, conn))


@router.get("/admin/qr.png")
def get_qr_image(
    request: Request,
    base: Optional[str] = Query(None, max_length=255),
    size: int = Query(10, ge=2, le=40, description="Pixels per QR module"),
    conn: Connection = Depends(get_db_connection),
):
    png = make_qr_png(_qr_target(request, base, conn), box_size=size)
    return Response(content=png, media_type="image/png")
