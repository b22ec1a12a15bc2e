# =======================================================================================
# checkin/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field
from .enums import BibleScore, PrayerScore, EvaluationScore, GrowthTierCode

# ========== Check-in ==========

class CheckInRequest(BaseModel):
    """Check-in form submission."""
    name: str = Field(..., min_length=1, max_length=50, description="Attendee name")
    phone: str = Field(..., min_length=1, max_length=20, description="Last four phone digits")
    latitude: Optional[float] = Field(None, description="Device latitude when geofence is on")
    longitude: Optional[float] = Field(None, description="Device longitude when geofence is on")


class CheckInResponse(BaseModel):
    success: bool
    message: str
    already_checked: bool = False
    attendee_id: Optional[str] = None
    checked_at: Optional[datetime] = None
    distance_m: Optional[float] = None


class RegisterAttendeeRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    phone: str = Field(..., min_length=1, max_length=20)


class AttendeeInfo(BaseModel):
    id: str
    name: str
    phone: str


class RegisterAttendeeResponse(BaseModel):
    success: bool
    data: AttendeeInfo


# ========== Admin Auth ==========

class AdminLoginRequest(BaseModel):
    password: str


class AuthResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class SessionStatus(BaseModel):
    is_admin: bool


# ========== Settings ==========

class SettingsView(BaseModel):
    session_active: bool
    geofence_enabled: bool
    church_lat: Optional[float] = None
    church_lng: Optional[float] = None
    geofence_radius_m: float
    check_in_base_url: Optional[str] = None


class SettingsUpdate(BaseModel):
    session_active: Optional[bool] = None
    geofence_enabled: Optional[bool] = None
    church_lat: Optional[float] = Field(None, ge=-90, le=90)
    church_lng: Optional[float] = Field(None, ge=-180, le=180)
    geofence_radius_m: Optional[float] = Field(None, gt=0, le=100000)
    check_in_base_url: Optional[str] = Field(None, max_length=255)


class PublicSettings(BaseModel):
    meeting_title: str
    session_active: bool
    geofence_enabled: bool


class SessionToggleRequest(BaseModel):
    active: bool


# ========== Health ==========

class HealthResponse(BaseModel):
    status: str                 # "ok" | "error"
    dataAvailable: bool
    message: Optional[str] = None


class SimpleResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    deleted: Optional[int] = None


# ========== Logs / Dashboard ==========

class LogItem(BaseModel):
    id: int
    attendee_id: str
    name: str
    phone: str
    created_at: datetime
    local_date: str
    local_time: str             # "HH:MM" in meeting-local time
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_m: Optional[float] = None


class LogListResponse(BaseModel):
    items: List[LogItem]
    total: int
    page: int
    page_size: int


class TodayLogsResponse(BaseModel):
    date: str
    count: int                  # distinct attendees
    logs: List[LogItem]


class Summary(BaseModel):
    date: str
    today_count: int
    today_logs: int
    total_attendees: int
    total_logs: int
    session_active: bool


# ========== Attendees ==========

class AttendeeListItem(BaseModel):
    id: str
    name: str
    phone: str
    created_at: datetime
    attendance_days: int = 0
    last_attended_at: Optional[datetime] = None


class AttendeeListResponse(BaseModel):
    items: List[AttendeeListItem]
    total: int
    page: int
    page_size: int


class AttendeeDetail(BaseModel):
    id: str
    name: str
    phone: str
    created_at: datetime
    attendance_days: int
    attended_dates: List[str]
    current_streak: int
    best_streak: int


class AttendeeUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    phone: Optional[str] = Field(None, min_length=1, max_length=20)


class ImportResult(BaseModel):
    inserted: int
    duplicates: int
    invalid: int


# ========== Rankings ==========

class RankingItem(BaseModel):
    rank: int
    attendee_id: str
    name: str
    phone: str
    total_days: int
    current_streak: int
    best_streak: int
    attendance_rate: float
    last_attended: Optional[str] = None


class RankingsResponse(BaseModel):
    session_dates: List[str]
    items: List[RankingItem]


# ========== QR ==========

class QRLinkResponse(BaseModel):
    url: str


# ========== Growth calculator ==========

class GrowthScoreRequest(BaseModel):
    absent: int = Field(0, ge=0, le=13, description="Sunday afternoon absences this quarter")
    bible: BibleScore = 20
    prayer: PrayerScore = 15
    evangelism: int = Field(0, ge=0, le=5, description="New members brought")
    service: EvaluationScore = 7
    special: EvaluationScore = 7


class GrowthTier(BaseModel):
    code: GrowthTierCode
    name: str
    description: str


class GrowthBreakdown(BaseModel):
    attendance: float
    bible: int
    prayer: int
    evangelism: int
    service: int
    special: int


class GrowthScoreResponse(BaseModel):
    score: int
    tier: GrowthTier
    breakdown: GrowthBreakdown


class GrowthOption(BaseModel):
    points: int
    label: str


class GrowthCategory(BaseModel):
    key: str
    title: str
    max_points: int
    description: str
    options: List[GrowthOption] = []


class GrowthReward(BaseModel):
    badge: str
    title: str
    condition: str
    amount: int


class GrowthCriteriaResponse(BaseModel):
    pass_line: int
    top_line: int
    categories: List[GrowthCategory]
    rewards: List[GrowthReward]
