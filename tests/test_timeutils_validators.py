from datetime import date, datetime, timezone

import pytest

from checkin.utils.exceptions import InvalidInputError
from checkin.utils.timeutils import (
    local_date_str,
    local_day_bounds_iso,
    local_time_str,
    parse_iso,
    to_iso,
)
from checkin.utils.validators import normalize_name, normalize_phone, validate_coordinates


def test_iso_is_fixed_width():
    a = to_iso(datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc))
    b = to_iso(datetime(2026, 3, 4, 5, 6, 7, 123456, tzinfo=timezone.utc))

    assert a == "2026-03-04T05:06:07.000000+00:00"
    assert len(a) == len(b)
    assert parse_iso(b) == datetime(2026, 3, 4, 5, 6, 7, 123456, tzinfo=timezone.utc)


def test_local_date_crosses_midnight():
    assert local_date_str("2026-03-04T14:59:59.000000+00:00") == "2026-03-04"
    assert local_date_str("2026-03-04T15:00:00.000000+00:00") == "2026-03-05"
    assert local_time_str("2026-03-04T15:00:00.000000+00:00") == "00:00"


def test_local_date_with_explicit_offset():
    assert local_date_str("2026-03-04T15:00:00.000000+00:00", offset_hours=0) == "2026-03-04"


def test_local_day_bounds():
    start, end = local_day_bounds_iso(date(2026, 3, 5))

    assert start == "2026-03-04T15:00:00.000000+00:00"
    assert end == "2026-03-05T15:00:00.000000+00:00"


def test_normalize_name_and_phone():
    assert normalize_name("  홍   길동 ") == "홍 길동"
    assert normalize_phone(" 12 34 ") == "1234"
    with pytest.raises(InvalidInputError):
        normalize_phone("010-1234-5678")
    with pytest.raises(InvalidInputError):
        normalize_name("")


def test_coordinates_must_come_in_pairs():
    validate_coordinates(None, None)
    validate_coordinates(37.5, 127.0)
    with pytest.raises(InvalidInputError):
        validate_coordinates(37.5, None)
    with pytest.raises(InvalidInputError):
        validate_coordinates(95.0, 127.0)
