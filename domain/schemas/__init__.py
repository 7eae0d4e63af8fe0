"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_plan_schemas import (
    DailySummary,
    MealSummary,
    Meal,
    MealPlanDocument,
    MacroDistribution,
    PatientTargets,
    ValidationIssue,
    ParseOutcome,
    DayPlan,
    MultiDaySummary,
    MultiDayPlanDocument,
    ChatMessage,
    MealPlanFormState,
)
from domain.schemas.wire_schemas import (
    MealPlanEnvelope,
    LegacyMealPlanEnvelope,
    MultiDayPlanEnvelope,
)
from domain.schemas.request_schemas import (
    ParseMessageRequest,
    CommentsRequest,
    CommentsResponse,
    ResolveSummaryRequest,
    FormSeedRequest,
    FormValidateRequest,
    CheckResponse,
    CurrentMealPlanRequest,
    ChatMessageCheckRequest,
    MultiDayParseRequest,
    MultiDaySummaryRequest,
)

__all__ = [
    # Meal plan schemas
    "DailySummary",
    "MealSummary",
    "Meal",
    "MealPlanDocument",
    "MacroDistribution",
    "PatientTargets",
    "ValidationIssue",
    "ParseOutcome",
    "DayPlan",
    "MultiDaySummary",
    "MultiDayPlanDocument",
    "ChatMessage",
    "MealPlanFormState",
    # Wire schemas
    "MealPlanEnvelope",
    "LegacyMealPlanEnvelope",
    "MultiDayPlanEnvelope",
    # Request / response schemas
    "ParseMessageRequest",
    "CommentsRequest",
    "CommentsResponse",
    "ResolveSummaryRequest",
    "FormSeedRequest",
    "FormValidateRequest",
    "CheckResponse",
    "CurrentMealPlanRequest",
    "ChatMessageCheckRequest",
    "MultiDayParseRequest",
    "MultiDaySummaryRequest",
]
