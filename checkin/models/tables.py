# =======================================================================================
# checkin/models/tables.py - Table Definitions
# =======================================================================================
from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

# Timestamps are fixed-width ISO-8601 UTC strings (see utils.timeutils.to_iso)

attendees = Table(
    "attendees",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(50), nullable=False),
    Column("phone", String(4), nullable=False),
    Column("created_at", String(32), nullable=False),
    UniqueConstraint("name", "phone", name="uq_attendees_name_phone"),
)

attendance_logs = Table(
    "attendance_logs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("attendee_id", String(36), ForeignKey("attendees.id"), nullable=False, index=True),
    Column("name", String(50), nullable=False),
    Column("phone", String(4), nullable=False),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    Column("distance_m", Float, nullable=True),
    Column("created_at", String(32), nullable=False, index=True),
)

settings = Table(
    "settings",
    metadata,
    Column("setting_key", String(64), primary_key=True),
    Column("value", Text, nullable=True),
    Column("updated_at", String(32), nullable=False),
)
