"""Single-day meal plan routes: parsing, comments, reconciliation and form seeding"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_meal_plan_service
from api.responses import STRICT_ERROR_RESPONSES
from app.exceptions import NotFoundError, ServiceValidationError
from domain.schemas.meal_plan_schemas import (
    DailySummary,
    MealPlanDocument,
    MealPlanFormState,
    ParseOutcome,
)
from domain.schemas.request_schemas import (
    CheckResponse,
    CommentsRequest,
    CommentsResponse,
    FormSeedRequest,
    FormValidateRequest,
    ParseMessageRequest,
    ResolveSummaryRequest,
)
from services.form_service import FormService
from services.meal_plan_service import MealPlanService
from services.reconciliation_service import ReconciliationService

router = APIRouter(prefix="/meal-plans", tags=["Meal Plans"])
logger = logging.getLogger("mealplan.api.meal_plans")


@router.post("/parse", response_model=ParseOutcome)
def parse_message(body: ParseMessageRequest, service: MealPlanService = Depends(get_meal_plan_service)):
    """
    Parse an assistant message into a tagged outcome.

    Always answers 200: missing plans, syntax failures and structural
    violations are reported through ``status`` and ``errors`` so the caller
    can still show the comments and display text.
    """
    try:
        return service.parse(body.message, body.protocol, body.targets)
    except Exception as e:
        logger.exception("Unexpected error parsing meal plan message")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to parse meal plan: {str(e)}",
        )


@router.post("/extract", response_model=MealPlanDocument, responses=STRICT_ERROR_RESPONSES)
def extract_document(body: ParseMessageRequest, service: MealPlanService = Depends(get_meal_plan_service)):
    """
    Strict extraction of the normalized plan.

    Returns:
        The normalized document. Errors use the standard envelope:
        422 SYNTAX_FAILURE, 422 STRUCTURAL_VIOLATION (``details.errors`` lists
        every issue) or 404 NOT_FOUND.
    """
    try:
        document = service.extract_document(body.message, body.protocol)
        logger.info("Extracted meal plan with %d meals", len(document.meals))
        return document
    except (NotFoundError, ServiceValidationError):
        raise
    except Exception as e:
        logger.exception("Unexpected error extracting meal plan")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to extract meal plan: {str(e)}",
        )


@router.post("/comments", response_model=CommentsResponse)
def get_comments(body: CommentsRequest, service: MealPlanService = Depends(get_meal_plan_service)):
    """Comments and chat display text, available even when the plan is broken"""
    comments, display_message = service.comments(body.message, body.protocol)
    return CommentsResponse(comments=comments, display_message=display_message)


@router.post("/daily-summary", response_model=DailySummary)
def resolve_daily_summary(body: ResolveSummaryRequest):
    """Resolve the daily summary to show, falling back to patient targets"""
    return ReconciliationService.resolve(body.parsed_summary, body.targets)


@router.post("/form", response_model=MealPlanFormState)
def seed_form(body: FormSeedRequest, service: MealPlanService = Depends(get_meal_plan_service)):
    """Seed the editable meal plan form from an assistant message"""
    protocol = body.protocol or service.default_protocol
    return FormService.seed_form(body.message, protocol, body.targets, body.plan_name)


@router.post("/form/validate", response_model=CheckResponse)
def validate_form(body: FormValidateRequest):
    """Check whether an edited form can be saved"""
    error = FormService.validate_form(body.form)
    return CheckResponse(
        valid=error is None,
        error=error,
        ready=FormService.is_form_ready(body.form, body.is_loading),
    )
