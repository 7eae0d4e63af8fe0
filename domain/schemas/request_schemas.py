from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.enums import ProtocolVersion
from domain.schemas.meal_plan_schemas import (
    ChatMessage,
    DailySummary,
    DayPlan,
    MealPlanFormState,
    PatientTargets,
)


class ParseMessageRequest(BaseModel):
    message: str = Field(..., description="Raw assistant message")
    protocol: Optional[ProtocolVersion] = Field(
        None, description="Wire revision; defaults to the configured protocol"
    )
    targets: Optional[PatientTargets] = None


class CommentsRequest(BaseModel):
    message: str
    protocol: Optional[ProtocolVersion] = None


class CommentsResponse(BaseModel):
    comments: Optional[str] = None
    display_message: str


class ResolveSummaryRequest(BaseModel):
    parsed_summary: DailySummary = Field(default_factory=DailySummary.zero)
    targets: Optional[PatientTargets] = None


class FormSeedRequest(BaseModel):
    message: str
    protocol: Optional[ProtocolVersion] = None
    targets: Optional[PatientTargets] = None
    plan_name: str = ""


class FormValidateRequest(BaseModel):
    form: MealPlanFormState
    is_loading: bool = False


class CheckResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    ready: Optional[bool] = None


class CurrentMealPlanRequest(BaseModel):
    messages: List[ChatMessage] = Field(default_factory=list)
    protocol: Optional[ProtocolVersion] = None


class ChatMessageCheckRequest(BaseModel):
    message: str
    max_length: Optional[int] = Field(None, ge=1)


class MultiDayParseRequest(BaseModel):
    message: str


class MultiDaySummaryRequest(BaseModel):
    days: List[DayPlan] = Field(..., min_length=1)
