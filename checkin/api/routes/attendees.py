# =======================================================================================
# checkin/api/routes/attendees.py - Attendee Management Endpoints
# =======================================================================================
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.engine import Connection

from ...models.enums import AttendeeSortField, SortOrder
from ...models.schemas import (
    AttendeeDetail,
    AttendeeListItem,
    AttendeeListResponse,
    AttendeeUpdateRequest,
    ImportResult,
    SimpleResponse,
)
from ...services.attendee_service import AttendeeService
from ...utils.exceptions import CheckInServiceError
from ..dependencies import get_db_connection, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
attendee_service = AttendeeService()


@router.get("/admin/attendees", response_model=AttendeeListResponse)
def list_attendees(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    q: Optional[str] = Query(None, max_length=50, description="Name or phone substring"),
    sort: AttendeeSortField = "name",
    order: SortOrder = "asc",
    conn: Connection = Depends(get_db_connection),
):
    return attendee_service.list_attendees(conn, page, page_size, q, sort, order)


@router.post("/admin/attendees/import", response_model=ImportResult)
def import_attendees(file: UploadFile = File(...), conn: Connection = Depends(get_db_connection)):
    try:
        return attendee_service.import_attendees_from_csv(conn, file)
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/admin/attendees/{attendee_id}", response_model=AttendeeDetail)
def get_attendee(attendee_id: str, conn: Connection = Depends(get_db_connection)):
    try:
        return attendee_service.get_attendee_detail(conn, attendee_id)
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.patch("/admin/attendees/{attendee_id}", response_model=AttendeeListItem)
def update_attendee(
    attendee_id: str,
    request: AttendeeUpdateRequest,
    conn: Connection = Depends(get_db_connection),
):
    try:
        return attendee_service.update_attendee(conn, attendee_id, request)
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/admin/attendees/{attendee_id}", response_model=SimpleResponse)
def delete_attendee(attendee_id: str, conn: Connection = Depends(get_db_connection)):
    try:
        removed_logs = attendee_service.delete_attendee(conn, attendee_id)
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return SimpleResponse(success=True, message=f"{removed_logs} logs removed", deleted=1)
