# =======================================================================================
# checkin/utils/validators.py - Validation Helpers
# =======================================================================================
import re
from typing import Optional

from .exceptions import InvalidInputError

NAME_MAX_LENGTH = 50
PHONE_DIGITS = 4

_whitespace = re.compile(r"\s+")
_non_digit = re.compile(r"\D")


def normalize_name(name: Optional[str]) -> str:
    """Trim and collapse internal whitespace."""
    cleaned = _whitespace.sub(" ", (name or "").strip())
    if not cleaned:
        raise InvalidInputError("이름을 입력해주세요.")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise InvalidInputError(f"이름은 {NAME_MAX_LENGTH}자 이하로 입력해주세요.")
    return cleaned


def normalize_phone(phone: Optional[str]) -> str:
    """
    Phone identity is the last four digits.

    Separators such as '-' or spaces are dropped before checking, so
    '12-34' and '1234' are the same attendee.
    """
    digits = _non_digit.sub("", phone or "")
    if len(digits) != PHONE_DIGITS:
        raise InvalidInputError("전화번호 뒷 4자리를 입력해주세요.")
    return digits


def validate_coordinates(latitude: Optional[float], longitude: Optional[float]) -> None:
    if latitude is None and longitude is None:
        return
    if latitude is None or longitude is None:
        raise InvalidInputError("위치 정보가 올바르지 않습니다.")
    if not (-90.0 <= latitude <= 90.0) or not (-180.0 <= longitude <= 180.0):
        raise InvalidInputError("위치 정보가 올바르지 않습니다.")
