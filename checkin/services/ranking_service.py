# =======================================================================================
# checkin/services/ranking_service.py - Attendance Rollup, Streaks and Rankings
# =======================================================================================
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import text
from sqlalchemy.engine import Connection

from ..models.schemas import RankingItem, RankingsResponse
from ..utils.timeutils import local_date_str, local_day_start_utc, to_iso


def attended_dates_by_attendee(rows: Iterable) -> Dict[str, Set[str]]:
    """attendee_id -> set of local dates; several check-ins on one day count once."""
    dates: Dict[str, Set[str]] = defaultdict(set)
    for row in rows:
        dates[row["attendee_id"]].add(local_date_str(row["created_at"]))
    return dates


def collect_session_dates(date_sets: Iterable[Set[str]]) -> List[str]:
    """A session date is any local date on which at least one person checked in."""
    sessions: Set[str] = set()
    for dates in date_sets:
        sessions |= dates
    return sorted(sessions)


def current_streak(session_dates: List[str], attended: Set[str]) -> int:
    """Consecutive sessions attended, counting back from the most recent one."""
    streak = 0
    for day in reversed(session_dates):
        if day not in attended:
            break
        streak += 1
    return streak


def best_streak(session_dates: List[str], attended: Set[str]) -> int:
    best = run = 0
    for day in session_dates:
        if day in attended:
            run += 1
            best = max(best, run)
        else:
            run = 0
    return best


def assign_competition_ranks(items: List[RankingItem]) -> None:
    """1, 2, 2, 4 ranking on (total_days, current_streak); items must be sorted."""
    previous_key = None
    for position, item in enumerate(items, start=1):
        key = (item.total_days, item.current_streak)
        item.rank = items[position - 2].rank if key == previous_key else position
        previous_key = key


class RankingService:
    """Builds the attendance leaderboard from raw log rows."""

    @staticmethod
    def fetch_rows(conn: Connection, start: Optional[date] = None, end: Optional[date] = None):
        clauses: List[str] = []
        params = {}
        if start is not None:
            clauses.append("l.created_at >= :start")
            params["start"] = to_iso(local_day_start_utc(start))
        if end is not None:
            clauses.append("l.created_at < :end")
            params["end"] = to_iso(local_day_start_utc(end + timedelta(days=1)))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        return conn.execute(
            text(f"""
                SELECT l.attendee_id AS attendee_id, l.created_at AS created_at,
                       a.name AS name, a.phone AS phone
                FROM attendance_logs l
                JOIN attendees a ON a.id = l.attendee_id
                {where}
            """),
            params,
        ).mappings().all()

    def build_rankings(
        self,
        conn: Connection,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> RankingsResponse:
        rows = self.fetch_rows(conn, start, end)
        people = {r["attendee_id"]: (r["name"], r["phone"]) for r in rows}
        by_attendee = attended_dates_by_attendee(rows)
        sessions = collect_session_dates(by_attendee.values())

        items: List[RankingItem] = []
        for attendee_id, attended in by_attendee.items():
            name, phone = people[attendee_id]
            items.append(
                RankingItem(
                    rank=0,
                    attendee_id=attendee_id,
                    name=name,
                    phone=phone,
                    total_days=len(attended),
                    current_streak=current_streak(sessions, attended),
                    best_streak=best_streak(sessions, attended),
                    attendance_rate=round(len(attended) / len(sessions), 4) if sessions else 0.0,
                    last_attended=max(attended),
                )
            )

        items.sort(key=lambda i: (-i.total_days, -i.current_streak, i.name, i.phone))
        assign_competition_ranks(items)
        if limit:
            items = items[:limit]
        return RankingsResponse(session_dates=sessions, items=items)
