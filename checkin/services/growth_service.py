# =======================================================================================
# checkin/services/growth_service.py - Growth Point Calculator
# =======================================================================================
import math

from ..models.schemas import (
    GrowthBreakdown,
    GrowthCategory,
    GrowthCriteriaResponse,
    GrowthOption,
    GrowthReward,
    GrowthScoreRequest,
    GrowthScoreResponse,
    GrowthTier,
)

ATTENDANCE_MAX = 30
QUARTER_WEEKS = 13
FREE_ABSENCES = 1
EVANGELISM_PER_PERSON = 5
EVANGELISM_MAX = 15
PASS_LINE = 70
TOP_LINE = 90

TIERS = {
    "S": GrowthTier(code="S", name="분기 1위 유력 (S등급)", description="25,000원 상당 혜택 대상자!"),
    "PASS": GrowthTier(code="PASS", name="기본 선물 확정 (Pass)", description="5,000원 상당 선물 획득!"),
    "FAIL": GrowthTier(code="FAIL", name="격려 대상 (Fail)", description="조금만 더 힘내세요! (70점 커트라인)"),
}


def attendance_points(absent: int) -> float:
    """One absence keeps full marks; from the second, pro-rated over the quarter."""
    if absent <= FREE_ABSENCES:
        return float(ATTENDANCE_MAX)
    span = QUARTER_WEEKS - FREE_ABSENCES
    return max(0.0, ATTENDANCE_MAX * (QUARTER_WEEKS - absent) / span)


def evangelism_points(people: int) -> int:
    return min(EVANGELISM_MAX, people * EVANGELISM_PER_PERSON)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def tier_for(score: int) -> GrowthTier:
    if score >= TOP_LINE:
        return TIERS["S"]
    if score >= PASS_LINE:
        return TIERS["PASS"]
    return TIERS["FAIL"]


def calculate(req: GrowthScoreRequest) -> GrowthScoreResponse:
    breakdown = GrowthBreakdown(
        attendance=round(attendance_points(req.absent), 2),
        bible=req.bible,
        prayer=req.prayer,
        evangelism=evangelism_points(req.evangelism),
        service=req.service,
        special=req.special,
    )
    total = round_half_up(
        attendance_points(req.absent)
        + breakdown.bible
        + breakdown.prayer
        + breakdown.evangelism
        + breakdown.service
        + breakdown.special
    )
    return GrowthScoreResponse(score=total, tier=tier_for(total), breakdown=breakdown)


_EVALUATION_OPTIONS = [
    GrowthOption(points=10, label="매우 우수"),
    GrowthOption(points=7, label="보통"),
    GrowthOption(points=3, label="노력 필요"),
]


def criteria() -> GrowthCriteriaResponse:
    return GrowthCriteriaResponse(
        pass_line=PASS_LINE,
        top_line=TOP_LINE,
        categories=[
            GrowthCategory(
                key="absent", title="주일 오후 모임", max_points=ATTENDANCE_MAX,
                description="1회 결석까지는 만점(30점). 이후 비례 감점.",
            ),
            GrowthCategory(
                key="bible", title="성경 통독", max_points=20,
                description="갓피플 성경앱 기준 '밀린 날짜' 0일 시 만점.",
                options=[
                    GrowthOption(points=20, label="Perfect (0일)"),
                    GrowthOption(points=15, label="Good (1~7일)"),
                    GrowthOption(points=10, label="Warning (8~14일)"),
                    GrowthOption(points=5, label="Danger (15일+)"),
                ],
            ),
            GrowthCategory(
                key="prayer", title="주중 기도회", max_points=15,
                description="분기별 공지되는 기준에 따라 점수 부여.",
                options=[
                    GrowthOption(points=15, label="완주"),
                    GrowthOption(points=8, label="부분"),
                    GrowthOption(points=0, label="미참여"),
                ],
            ),
            GrowthCategory(
                key="evangelism", title="전도 및 정착", max_points=EVANGELISM_MAX,
                description="새가족 1명당 5점 (최대 15점)",
            ),
            GrowthCategory(
                key="service", title="봉사", max_points=10,
                description="봉사 참여도 평가", options=_EVALUATION_OPTIONS,
            ),
            GrowthCategory(
                key="special", title="사역자 평가", max_points=10,
                description="한 영혼 사랑, 영적 성장 열정", options=_EVALUATION_OPTIONS,
            ),
        ],
        rewards=[
            GrowthReward(badge="1st Place", title="분기 전체 1위", condition="기본 선물 + 2만원 추가 상품권", amount=25000),
            GrowthReward(badge="Pass (70점↑)", title="성장 격려상", condition="70점 통과자 전원 (최대 12명)", amount=5000),
            GrowthReward(badge="Special", title="담당 사역자 특별상", condition="영적 성장 및 헌신 지체", amount=20000),
        ],
    )
