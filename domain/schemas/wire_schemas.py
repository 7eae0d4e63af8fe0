"""
Strict schemas for the structured document as it arrives on the wire.

Types are not coerced: a quoted number or a boolean is a violation, not a
value. Unknown keys are ignored so assistants may add extra fields.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

from core.utils.helpers import round_half_up


class WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _kcal_after_rounding(v: float) -> float:
    # the normalized value is a whole number and must stay positive
    if round_half_up(v) < 1:
        raise ValueError("kcal must round to a positive whole number")
    return v


class WireDailySummary(WireModel):
    kcal: StrictFloat = Field(..., gt=0, allow_inf_nan=False)
    proteins: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    fats: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    carbs: StrictFloat = Field(..., ge=0, allow_inf_nan=False)

    @field_validator("kcal")
    @classmethod
    def kcal_positive_after_rounding(cls, v: float) -> float:
        return _kcal_after_rounding(v)


class WireMealSummary(WireModel):
    kcal: StrictFloat = Field(..., gt=0, allow_inf_nan=False)
    protein: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    fat: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    carb: StrictFloat = Field(..., ge=0, allow_inf_nan=False)

    @field_validator("kcal")
    @classmethod
    def kcal_positive_after_rounding(cls, v: float) -> float:
        return _kcal_after_rounding(v)


class WireMeal(WireModel):
    name: StrictStr
    ingredients: StrictStr
    preparation: StrictStr
    summary: WireMealSummary

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Meal name must be a non-empty string")
        return v


class WireMealPlan(WireModel):
    daily_summary: WireDailySummary
    meals: List[WireMeal] = Field(..., min_length=1)


class LegacyWireMealPlan(WireMealPlan):
    """Tag revision: the daily summary block is optional and reconciled later"""

    daily_summary: Optional[WireDailySummary] = None


class MealPlanEnvelope(WireModel):
    meal_plan: WireMealPlan


class LegacyMealPlanEnvelope(WireModel):
    meal_plan: LegacyWireMealPlan


class WireDay(WireModel):
    day_number: StrictInt = Field(..., ge=1, le=7)
    name: Optional[StrictStr] = None
    meal_plan: WireMealPlan


class WireMultiDaySummary(WireModel):
    number_of_days: StrictInt = Field(..., ge=1, le=7)
    average_kcal: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    average_proteins: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    average_fats: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    average_carbs: StrictFloat = Field(..., ge=0, allow_inf_nan=False)


class WireMultiDayPlan(WireModel):
    days: List[WireDay] = Field(..., min_length=1)
    summary: WireMultiDaySummary


class MultiDayPlanEnvelope(WireModel):
    multi_day_plan: WireMultiDayPlan
