# =======================================================================================
# checkin/api/routes/growth.py - Growth Score Calculator
# =======================================================================================
from fastapi import APIRouter

from ...models.schemas import GrowthCriteriaResponse, GrowthScoreRequest, GrowthScoreResponse
from ...services import growth_service

router = APIRouter()


@router.post("/growth/score", response_model=GrowthScoreResponse)
def calculate_score(request: GrowthScoreRequest):
    return growth_service.calculate(request)


@router.get("/growth/criteria", response_model=GrowthCriteriaResponse)
def get_criteria():
    return growth_service.criteria()
