# =======================================================================================
# checkin/api/routes/dashboard.py - Admin Logs, Summary and Rankings
# =======================================================================================
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.engine import Connection

from ...models.enums import LogSortField, SortOrder
from ...models.schemas import (
    LogListResponse,
    RankingsResponse,
    SimpleResponse,
    Summary,
    TodayLogsResponse,
)
from ...services.dashboard_service import DashboardService
from ...services.ranking_service import RankingService
from ...utils.exceptions import CheckInServiceError
from ..dependencies import get_db_connection, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
dashboard_service = DashboardService()
ranking_service = RankingService()


@router.get("/admin/summary", response_model=Summary)
def get_summary(conn: Connection = Depends(get_db_connection)):
    return dashboard_service.get_summary(conn)


@router.get("/admin/logs/today", response_model=TodayLogsResponse)
def get_todays_logs(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    conn: Connection = Depends(get_db_connection),
):
    return dashboard_service.get_todays_logs(conn, limit)


@router.get("/admin/logs", response_model=LogListResponse)
def list_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    sort: LogSortField = "created_at",
    order: SortOrder = "desc",
    day: Optional[date] = Query(None, alias="date", description="Local date, YYYY-MM-DD"),
    q: Optional[str] = Query(None, max_length=50, description="Name or phone substring"),
    conn: Connection = Depends(get_db_connection),
):
    return dashboard_service.list_logs(conn, page, page_size, sort, order, day, q)


@router.get("/admin/logs/export.csv")
def export_logs(
    day: Optional[date] = Query(None, alias="date"),
    conn: Connection = Depends(get_db_connection),
):
    filename = f"attendance-{day.isoformat() if day else 'all'}.csv"
    # BOM so spreadsheet apps pick up UTF-8 for Korean names
    content = "\ufeff" + dashboard_service.export_logs_csv(conn, day)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/admin/logs/{log_id}", response_model=SimpleResponse)
def delete_log(log_id: int, conn: Connection = Depends(get_db_connection)):
    try:
        dashboard_service.delete_log(conn, log_id)
    except CheckInServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return SimpleResponse(success=True, deleted=1)


@router.delete("/admin/logs", response_model=SimpleResponse)
def clear_history(conn: Connection = Depends(get_db_connection)):
    deleted = dashboard_service.clear_history(conn)
    return SimpleResponse(success=True, deleted=deleted)


@router.get("/admin/rankings", response_model=RankingsResponse)
def get_rankings(
    start: Optional[date] = Query(None, description="First local date, inclusive"),
    end: Optional[date] = Query(None, description="Last local date, inclusive"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    conn: Connection = Depends(get_db_connection),
):
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return ranking_service.build_rankings(conn, start, end, limit)
