"""Chat helper routes"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_meal_plan_service
from api.responses import STRICT_ERROR_RESPONSES
from app.exceptions import NotFoundError
from domain.schemas.meal_plan_schemas import MealPlanDocument
from domain.schemas.request_schemas import (
    ChatMessageCheckRequest,
    CheckResponse,
    CurrentMealPlanRequest,
)
from services.chat_service import ChatService
from services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/chat", tags=["Chat"])
logger = logging.getLogger("mealplan.api.chat")


@router.post("/current-meal-plan", response_model=MealPlanDocument, responses=STRICT_ERROR_RESPONSES)
def current_meal_plan(body: CurrentMealPlanRequest, service: MealPlanService = Depends(get_meal_plan_service)):
    """Return the plan held by the most recent assistant message in the conversation"""
    protocol = body.protocol or service.default_protocol
    document = ChatService.extract_current_meal_plan(body.messages, protocol)
    if document is None:
        raise NotFoundError("No meal plan in the current conversation", code="NOT_FOUND")
    return document


@router.post("/validate-message", response_model=CheckResponse)
def validate_message(body: ChatMessageCheckRequest):
    """Check a user message before it is sent"""
    valid, error = ChatService.validate_chat_message(body.message, body.max_length)
    return CheckResponse(valid=valid, error=error)
