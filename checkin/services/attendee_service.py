# =======================================================================================
# checkin/services/attendee_service.py - Attendee Management Service
# =======================================================================================
import csv
import io
import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from fastapi import UploadFile
from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection

from ..models.schemas import (
    AttendeeDetail,
    AttendeeListItem,
    AttendeeListResponse,
    AttendeeUpdateRequest,
    ImportResult,
)
from ..utils.exceptions import AttendeeNotFoundError, DuplicateAttendeeError, InvalidInputError
from ..utils.validators import normalize_name, normalize_phone
from .checkin_service import CheckInService
from .ranking_service import (
    attended_dates_by_attendee,
    best_streak,
    collect_session_dates,
    current_streak,
)

logger = logging.getLogger(__name__)

_ATTENDEE_SORT_COLUMNS = {"name": "name", "created_at": "created_at"}


class AttendeeService:
    """Handles attendee management operations for the admin panel."""

    def __init__(self, checkin_service: CheckInService = None):
        self.checkin_service = checkin_service or CheckInService()

    # ----------------- helpers -----------------

    @staticmethod
    def _attendance_rollup(
        conn: Connection, attendee_ids: Optional[List[str]] = None
    ) -> Tuple[Dict[str, Set[str]], Dict[str, str]]:
        """Per attendee: set of attended local dates, and latest check-in timestamp."""
        if attendee_ids is not None and not attendee_ids:
            return {}, {}

        query = "SELECT attendee_id, created_at FROM attendance_logs"
        params: Dict[str, Any] = {}
        stmt = text(query)
        if attendee_ids is not None:
            stmt = text(query + " WHERE attendee_id IN :ids").bindparams(
                bindparam("ids", expanding=True)
            )
            params["ids"] = attendee_ids

        rows = conn.execute(stmt, params).mappings().all()
        last_seen: Dict[str, str] = {}
        for r in rows:
            if r["created_at"] > last_seen.get(r["attendee_id"], ""):
                last_seen[r["attendee_id"]] = r["created_at"]
        return attended_dates_by_attendee(rows), last_seen

    @staticmethod
    def _to_list_item(row, dates: Dict[str, Set[str]], last_seen: Dict[str, str]) -> AttendeeListItem:
        return AttendeeListItem(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            created_at=row["created_at"],
            attendance_days=len(dates.get(row["id"], ())),
            last_attended_at=last_seen.get(row["id"]),
        )

    # ----------------- queries -----------------

    def list_attendees(
        self,
        conn: Connection,
        page: int = 1,
        page_size: int = 50,
        query: Optional[str] = None,
        sort: str = "name",
        order: str = "asc",
    ) -> AttendeeListResponse:
        """List attendees with pagination, search on name/phone and sorting."""
        params: Dict[str, Any] = {}
        where = ""
        if query:
            where = "WHERE name LIKE :like OR phone LIKE :like"
            params["like"] = f"%{query.strip()}%"
        direction = "ASC" if order == "asc" else "DESC"
        offset = (page - 1) * page_size

        total = conn.execute(
            text(f"SELECT COUNT(*) FROM attendees {where}"), params
        ).scalar_one()

        if sort == "attendance_days":
            # Needs the rollup for every matching attendee before slicing
            rows = conn.execute(
                text(f"SELECT id, name, phone, created_at FROM attendees {where}"), params
            ).mappings().all()
            dates, last_seen = self._attendance_rollup(conn, [r["id"] for r in rows])
            items = [self._to_list_item(r, dates, last_seen) for r in rows]
            items.sort(key=lambda i: i.name)
            items.sort(key=lambda i: i.attendance_days, reverse=(order != "asc"))
            items = items[offset:offset + page_size]
        else:
            column = _ATTENDEE_SORT_COLUMNS.get(sort, "name")
            rows = conn.execute(
                text(f"""
                    SELECT id, name, phone, created_at
                    FROM attendees
                    {where}
                    ORDER BY {column} {direction}, phone {direction}
                    LIMIT :limit OFFSET :offset
                """),
                {**params, "limit": page_size, "offset": offset},
            ).mappings().all()
            dates, last_seen = self._attendance_rollup(conn, [r["id"] for r in rows])
            items = [self._to_list_item(r, dates, last_seen) for r in rows]

        return AttendeeListResponse(
            items=items, total=int(total or 0), page=page, page_size=page_size
        )

    def get_attendee_detail(self, conn: Connection, attendee_id: str) -> AttendeeDetail:
        attendee = self.checkin_service.get_attendee(conn, attendee_id)
        dates, _ = self._attendance_rollup(conn, [attendee_id])
        attended = dates.get(attendee_id, set())
        # streaks are measured against every session anyone attended
        all_dates, _ = self._attendance_rollup(conn)
        sessions = collect_session_dates(all_dates.values())

        return AttendeeDetail(
            id=attendee["id"],
            name=attendee["name"],
            phone=attendee["phone"],
            created_at=attendee["created_at"],
            attendance_days=len(attended),
            attended_dates=sorted(attended),
            current_streak=current_streak(sessions, attended),
            best_streak=best_streak(sessions, attended),
        )

    # ----------------- mutations -----------------

    def update_attendee(
        self, conn: Connection, attendee_id: str, req: AttendeeUpdateRequest
    ) -> AttendeeListItem:
        """
        Rename an attendee or fix their phone digits.

        Log rows carry a copy of name/phone, so they are rewritten too.
        """
        attendee = self.checkin_service.get_attendee(conn, attendee_id)
        name = normalize_name(req.name) if req.name is not None else attendee["name"]
        phone = normalize_phone(req.phone) if req.phone is not None else attendee["phone"]

        clash = conn.execute(
            text("SELECT id FROM attendees WHERE name = :name AND phone = :phone AND id != :id"),
            {"name": name, "phone": phone, "id": attendee_id},
        ).first()
        if clash:
            raise DuplicateAttendeeError("같은 이름과 전화번호의 참석자가 이미 있습니다.")

        conn.execute(
            text("UPDATE attendees SET name = :name, phone = :phone WHERE id = :id"),
            {"name": name, "phone": phone, "id": attendee_id},
        )
        conn.execute(
            text("UPDATE attendance_logs SET name = :name, phone = :phone WHERE attendee_id = :id"),
            {"name": name, "phone": phone, "id": attendee_id},
        )
        logger.info(
            "Attendee %s updated: %s/%s -> %s/%s",
            attendee_id, attendee["name"], attendee["phone"], name, phone,
        )

        dates, last_seen = self._attendance_rollup(conn, [attendee_id])
        row = {**attendee, "name": name, "phone": phone}
        return self._to_list_item(row, dates, last_seen)

    def delete_attendee(self, conn: Connection, attendee_id: str) -> int:
        """Delete the attendee and their logs; returns the number of logs removed."""
        self.checkin_service.get_attendee(conn, attendee_id)
        result = conn.execute(
            text("DELETE FROM attendance_logs WHERE attendee_id = :id"), {"id": attendee_id}
        )
        conn.execute(text("DELETE FROM attendees WHERE id = :id"), {"id": attendee_id})
        logger.warning("Attendee %s deleted with %s logs", attendee_id, result.rowcount)
        return result.rowcount

    def import_attendees(self, conn: Connection, rows: Iterable[Dict[str, str]]) -> ImportResult:
        inserted = duplicates = invalid = 0
        for row in rows:
            try:
                name = normalize_name(row.get("name"))
                phone = normalize_phone(row.get("phone"))
            except InvalidInputError:
                invalid += 1
                continue

            if self.checkin_service.find_attendee(conn, name, phone):
                duplicates += 1
                continue
            self.checkin_service.ensure_attendee(conn, name, phone)
            inserted += 1

        logger.info("Attendee import: %s inserted, %s duplicates, %s invalid", inserted, duplicates, invalid)
        return ImportResult(inserted=inserted, duplicates=duplicates, invalid=invalid)

    def import_attendees_from_csv(self, conn: Connection, file: UploadFile) -> ImportResult:
        """
        CSV import: headers = name,phone
        Example line: 홍길동,1234
        """
        try:
            data = file.file.read()
            # utf-8-sig strips the BOM spreadsheet exports put in front
            reader = csv.DictReader(io.StringIO(data.decode("utf-8-sig")))
        except UnicodeDecodeError:
            raise InvalidInputError("CSV 파일은 UTF-8 인코딩이어야 합니다.")

        if not reader.fieldnames or not {"name", "phone"} <= set(reader.fieldnames):
            raise InvalidInputError("CSV 헤더는 name,phone 이어야 합니다.")

        return self.import_attendees(conn, reader)
