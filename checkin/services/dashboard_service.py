# =======================================================================================
# checkin/services/dashboard_service.py
# =======================================================================================
import csv
import io
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Connection

from ..config import config
from ..models.schemas import LogItem, LogListResponse, Summary, TodayLogsResponse
from ..utils.exceptions import LogNotFoundError
from ..utils.timeutils import local_date_str, local_day_bounds_iso, local_time_str, local_today
from .settings_service import SettingsService

logger = logging.getLogger(__name__)

LOG_COLUMNS = "id, attendee_id, name, phone, latitude, longitude, distance_m, created_at"

_LOG_SORT_COLUMNS = {"created_at": "created_at", "name": "name"}


class DashboardService:
    """Attendance logs and summary numbers for the admin panel."""

    def __init__(self, settings_service: SettingsService = None):
        self.settings_service = settings_service or SettingsService()

    # ---------- helper mapping ----------

    @staticmethod
    def to_log_item(row) -> LogItem:
        return LogItem(
            id=row["id"],
            attendee_id=row["attendee_id"],
            name=row["name"],
            phone=row["phone"],
            created_at=row["created_at"],
            local_date=local_date_str(row["created_at"]),
            local_time=local_time_str(row["created_at"]),
            latitude=row["latitude"],
            longitude=row["longitude"],
            distance_m=row["distance_m"],
        )

    @staticmethod
    def _log_filters(day: Optional[date], query: Optional[str]) -> Tuple[str, Dict[str, Any]]:
        clauses: List[str] = []
        params: Dict[str, Any] = {}
        if day is not None:
            params["start"], params["end"] = local_day_bounds_iso(day)
            clauses.append("created_at >= :start AND created_at < :end")
        if query:
            params["like"] = f"%{query.strip()}%"
            clauses.append("(name LIKE :like OR phone LIKE :like)")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    # ---------- logs ----------

    def get_todays_logs(self, conn: Connection, limit: int = None) -> TodayLogsResponse:
        """Logs since local midnight, newest first."""
        today = local_today()
        start, end = local_day_bounds_iso(today)
        rows = conn.execute(
            text(f"""
                SELECT {LOG_COLUMNS}
                FROM attendance_logs
                WHERE created_at >= :start AND created_at < :end
                ORDER BY created_at DESC, id DESC
                LIMIT :limit
            """),
            {"start": start, "end": end, "limit": limit or config.RECENT_LOG_LIMIT},
        ).mappings().all()

        logs = [self.to_log_item(r) for r in rows]
        return TodayLogsResponse(
            date=today.isoformat(),
            count=len({log.attendee_id for log in logs}),
            logs=logs,
        )

    def list_logs(
        self,
        conn: Connection,
        page: int = 1,
        page_size: int = 50,
        sort: str = "created_at",
        order: str = "desc",
        day: Optional[date] = None,
        query: Optional[str] = None,
    ) -> LogListResponse:
        where, params = self._log_filters(day, query)
        column = _LOG_SORT_COLUMNS.get(sort, "created_at")
        direction = "ASC" if order == "asc" else "DESC"

        total = conn.execute(
            text(f"SELECT COUNT(*) AS total FROM attendance_logs {where}"), params
        ).scalar_one()

        rows = conn.execute(
            text(f"""
                SELECT {LOG_COLUMNS}
                FROM attendance_logs
                {where}
                ORDER BY {column} {direction}, id {direction}
                LIMIT :limit OFFSET :offset
            """),
            {**params, "limit": page_size, "offset": (page - 1) * page_size},
        ).mappings().all()

        return LogListResponse(
            items=[self.to_log_item(r) for r in rows],
            total=int(total or 0),
            page=page,
            page_size=page_size,
        )

    def delete_log(self, conn: Connection, log_id: int) -> None:
        result = conn.execute(
            text("DELETE FROM attendance_logs WHERE id = :id"), {"id": log_id}
        )
        if result.rowcount == 0:
            raise LogNotFoundError("출석 기록을 찾을 수 없습니다.")
        logger.info("Attendance log %s deleted", log_id)

    def clear_history(self, conn: Connection) -> int:
        result = conn.execute(text("DELETE FROM attendance_logs"))
        logger.warning("Attendance history cleared (%s rows)", result.rowcount)
        return result.rowcount

    def export_logs_csv(self, conn: Connection, day: Optional[date] = None) -> str:
        where, params = self._log_filters(day, None)
        rows = conn.execute(
            text(f"SELECT {LOG_COLUMNS} FROM attendance_logs {where} ORDER BY created_at ASC, id ASC"),
            params,
        ).mappings().all()

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(["id", "name", "phone", "local_date", "local_time"])
        for r in rows:
            writer.writerow([
                r["id"], r["name"], r["phone"],
                local_date_str(r["created_at"]), local_time_str(r["created_at"]),
            ])
        return buffer.getvalue()

    # ---------- summary ----------

    def get_summary(self, conn: Connection) -> Summary:
        today = local_today()
        start, end = local_day_bounds_iso(today)
        row = conn.execute(
            text("""
                SELECT
                  COUNT(DISTINCT attendee_id) AS today_count,
                  COUNT(*)                    AS today_logs
                FROM attendance_logs
                WHERE created_at >= :start AND created_at < :end
            """),
            {"start": start, "end": end},
        ).mappings().first()
        total_attendees = conn.execute(text("SELECT COUNT(*) FROM attendees")).scalar_one()
        total_logs = conn.execute(text("SELECT COUNT(*) FROM attendance_logs")).scalar_one()
        settings = self.settings_service.get_settings(conn)

        return Summary(
            date=today.isoformat(),
            today_count=int(row["today_count"] or 0) if row else 0,
            today_logs=int(row["today_logs"] or 0) if row else 0,
            total_attendees=int(total_attendees or 0),
            total_logs=int(total_logs or 0),
            session_active=settings.session_active,
        )
