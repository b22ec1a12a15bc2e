import os
import tempfile
import uuid
from datetime import datetime, timezone

# Must be set before the package reads its config
_tmpdir = tempfile.mkdtemp(prefix="checkin-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ["ADMIN_PASSWORD"] = "test-password"
os.environ["ADMIN_COOKIE_SECURE"] = "false"
os.environ["TZ_OFFSET_HOURS"] = "9"
os.environ["DUPLICATE_WINDOW_MINUTES"] = "60"
os.environ["PUBLIC_BASE_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from checkin.database import db_manager
from checkin.main import app
from checkin.utils.timeutils import to_iso

ADMIN_PASSWORD = "test-password"


@pytest.fixture(autouse=True)
def clean_db():
    db_manager.create_schema()
    with db_manager.get_connection() as conn:
        conn.execute(text("DELETE FROM attendance_logs"))
        conn.execute(text("DELETE FROM attendees"))
        conn.execute(text("DELETE FROM settings"))
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client():
    with TestClient(app) as c:
        res = c.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
        assert res.status_code == 200
        yield c


@pytest.fixture
def add_attendee():
    def _add(name: str, phone: str, created_at: datetime = None) -> str:
        attendee_id = str(uuid.uuid4())
        with db_manager.get_connection() as conn:
            conn.execute(
                text("INSERT INTO attendees (id, name, phone, created_at) VALUES (:id, :n, :p, :ts)"),
                {
                    "id": attendee_id, "n": name, "p": phone,
                    "ts": to_iso(created_at or datetime(2026, 1, 1, tzinfo=timezone.utc)),
                },
            )
        return attendee_id
    return _add


@pytest.fixture
def add_log():
    def _add(attendee_id: str, name: str, phone: str, created_at: datetime) -> None:
        with db_manager.get_connection() as conn:
            conn.execute(
                text("""
                    INSERT INTO attendance_logs (attendee_id, name, phone, created_at)
                    VALUES (:aid, :n, :p, :ts)
                """),
                {"aid": attendee_id, "n": name, "p": phone, "ts": to_iso(created_at)},
            )
    return _add


@pytest.fixture
def count_rows():
    def _count(table: str) -> int:
        with db_manager.get_connection() as conn:
            return conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
    return _count
