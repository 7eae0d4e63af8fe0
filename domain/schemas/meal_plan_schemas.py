"""
Internal meal plan schemas.

These are the shapes the rest of the application works with once an
assistant message has been extracted, validated and normalized. Nutrition
values are whole numbers and meal summaries use the short ``p``/``f``/``c``
names regardless of what the source document called them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.enums import ChatRole, ParseStatus


class DailySummary(BaseModel):
    """Daily nutrition totals"""

    kcal: int = 0
    proteins: int = 0
    fats: int = 0
    carbs: int = 0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def zero(cls) -> "DailySummary":
        return cls(kcal=0, proteins=0, fats=0, carbs=0)


class MealSummary(BaseModel):
    """Per-meal nutrition with internal short field names"""

    kcal: int = 0
    p: int = 0
    f: int = 0
    c: int = 0

    model_config = ConfigDict(frozen=True)


class Meal(BaseModel):
    name: str
    ingredients: str = ""
    preparation: str = ""
    summary: MealSummary = Field(default_factory=MealSummary)

    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ingredients": self.ingredients,
            "preparation": self.preparation,
            "summary": {
                "kcal": self.summary.kcal,
                "protein": self.summary.p,
                "fat": self.summary.f,
                "carb": self.summary.c,
            },
        }


class MealPlanDocument(BaseModel):
    """A single day's plan: a daily summary plus an ordered list of meals"""

    daily_summary: DailySummary = Field(default_factory=DailySummary.zero)
    meals: List[Meal]

    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> Dict[str, Any]:
        """Render the document with the external field names used on the wire."""
        return {
            "daily_summary": self.daily_summary.model_dump(),
            "meals": [meal.to_wire() for meal in self.meals],
        }


class MacroDistribution(BaseModel):
    """Target macro split in percent of daily energy"""

    p_perc: float = Field(..., ge=0, le=100, allow_inf_nan=False)
    f_perc: float = Field(..., ge=0, le=100, allow_inf_nan=False)
    c_perc: float = Field(..., ge=0, le=100, allow_inf_nan=False)


class PatientTargets(BaseModel):
    """Targets captured by the intake form; only read by the reconciler"""

    target_kcal: Optional[float] = Field(None, ge=0, le=10000, allow_inf_nan=False)
    macro_distribution: Optional[MacroDistribution] = Field(
        None, validation_alias="target_macro_distribution"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ValidationIssue(BaseModel):
    """One violated structural constraint"""

    field: str = Field(..., description="Dotted path, e.g. meal_plan.meals[0].name")
    message: str

    model_config = ConfigDict(frozen=True)


class ParseOutcome(BaseModel):
    """Tagged result of parsing one assistant message.

    ``document`` is only set when ``status`` is ``ok``. ``comments`` is
    attempted for every status so the conversational side-channel survives
    a broken plan.
    """

    status: ParseStatus
    document: Optional[MealPlanDocument] = None
    daily_summary: DailySummary = Field(default_factory=DailySummary.zero)
    comments: Optional[str] = None
    display_message: str = ""
    errors: List[ValidationIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == ParseStatus.OK


class DayPlan(BaseModel):
    day_number: int
    name: Optional[str] = None
    plan: MealPlanDocument


class MultiDaySummary(BaseModel):
    number_of_days: int
    average_kcal: int = 0
    average_proteins: int = 0
    average_fats: int = 0
    average_carbs: int = 0


class MultiDayPlanDocument(BaseModel):
    days: List[DayPlan]
    summary: MultiDaySummary


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class MealPlanFormState(BaseModel):
    """Editable form model seeded from an assistant message"""

    plan_name: str = ""
    meals: List[Meal] = Field(default_factory=list)
    daily_summary: DailySummary = Field(default_factory=DailySummary.zero)
