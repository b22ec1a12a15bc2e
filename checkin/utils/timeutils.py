# =======================================================================================
# checkin/utils/timeutils.py - Timestamp and Local-Date Helpers
# =======================================================================================
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from ..config import config

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """
    Render a datetime as a fixed-width UTC string.

    Every stored timestamp goes through here so that string comparison in SQL
    orders the same way as the instants themselves. Naive values are taken as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(ISO_FORMAT)


def parse_iso(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def local_tz(offset_hours: Optional[int] = None) -> timezone:
    hours = config.TZ_OFFSET_HOURS if offset_hours is None else offset_hours
    return timezone(timedelta(hours=hours))


def to_local(value: Union[str, datetime], offset_hours: Optional[int] = None) -> datetime:
    return parse_iso(value).astimezone(local_tz(offset_hours))


def local_date_str(value: Union[str, datetime], offset_hours: Optional[int] = None) -> str:
    """Bucket a UTC timestamp into the local calendar day, e.g. '2026-03-04'."""
    return to_local(value, offset_hours).date().isoformat()


def local_time_str(value: Union[str, datetime], offset_hours: Optional[int] = None) -> str:
    return to_local(value, offset_hours).strftime("%H:%M")


def local_today(offset_hours: Optional[int] = None) -> date:
    return utc_now().astimezone(local_tz(offset_hours)).date()


def local_day_start_utc(day: date, offset_hours: Optional[int] = None) -> datetime:
    """UTC instant of local midnight at the start of `day`."""
    local_midnight = datetime.combine(day, time.min, tzinfo=local_tz(offset_hours))
    return local_midnight.astimezone(timezone.utc)


def local_day_bounds_iso(day: date, offset_hours: Optional[int] = None):
    """(start, end) ISO strings covering one local day, end exclusive."""
    start = local_day_start_utc(day, offset_hours)
    return to_iso(start), to_iso(start + timedelta(days=1))
