"""Multi-day meal plan routes"""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from api.responses import STRICT_ERROR_RESPONSES
from app.exceptions import NotFoundError, ServiceValidationError
from domain.schemas.meal_plan_schemas import MultiDayPlanDocument, MultiDaySummary
from domain.schemas.request_schemas import MultiDayParseRequest, MultiDaySummaryRequest
from services.multi_day_plan_service import MultiDayPlanService

router = APIRouter(prefix="/multi-day-plans", tags=["Multi-Day Plans"])
logger = logging.getLogger("mealplan.api.multi_day_plans")


@router.post("/parse", response_model=MultiDayPlanDocument, responses=STRICT_ERROR_RESPONSES)
def parse_multi_day_plan(
    body: MultiDayParseRequest,
    recalculate_summary: bool = Query(False, description="Recompute averages from the days"),
):
    """
    Parse a multi-day plan (1 to 7 days) from an assistant message.

    Errors follow the single-day extract endpoint: 422 for syntax or
    structural problems, 404 when the message holds no plan.
    """
    try:
        return MultiDayPlanService.parse(body.message, recalculate_summary=recalculate_summary)
    except (NotFoundError, ServiceValidationError):
        raise
    except Exception as e:
        logger.exception("Unexpected error parsing multi-day plan")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to parse multi-day plan: {str(e)}",
        )


@router.post("/summary", response_model=MultiDaySummary)
def summarize_days(body: MultiDaySummaryRequest):
    """Average daily totals across the supplied days"""
    return MultiDayPlanService.summarize(body.days)
