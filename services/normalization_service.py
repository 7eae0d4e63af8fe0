"""
Field normalization: wire shape -> internal shape.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Union

from core.utils.helpers import round_half_up
from domain.schemas.meal_plan_schemas import (
    DailySummary,
    DayPlan,
    Meal,
    MealPlanDocument,
    MealSummary,
    MultiDayPlanDocument,
    MultiDaySummary,
)

# wire name -> internal name for per-meal nutrition
MEAL_SUMMARY_FIELDS = {"kcal": "kcal", "protein": "p", "fat": "f", "carb": "c"}
DAILY_SUMMARY_FIELDS = ("kcal", "proteins", "fats", "carbs")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _whole(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return round_half_up(value)


class NormalizationService:
    @staticmethod
    def normalize_daily_summary(summary: Mapping[str, Any] | None) -> DailySummary:
        if not summary:
            return DailySummary.zero()
        return DailySummary(**{field: _whole(summary.get(field)) for field in DAILY_SUMMARY_FIELDS})

    @staticmethod
    def normalize_meal(meal: Mapping[str, Any]) -> Meal:
        summary = meal.get("summary") or {}
        return Meal(
            name=_text(meal.get("name")),
            ingredients=_text(meal.get("ingredients")),
            preparation=_text(meal.get("preparation")),
            summary=MealSummary(
                **{internal: _whole(summary.get(wire)) for wire, internal in MEAL_SUMMARY_FIELDS.items()}
            ),
        )

    @staticmethod
    def normalize(payload: Union[MealPlanDocument, Mapping[str, Any]]) -> MealPlanDocument:
        """
        Map a validated document onto the internal schema.

        Accepts the decoded top-level mapping (``{"meal_plan": {...}}``), the
        inner plan mapping, or an already normalized document, so applying it
        twice gives the same result as applying it once. The input is never
        modified.

        - ``protein``/``fat``/``carb`` become ``p``/``f``/``c``
        - every nutrition value is rounded half-up to a whole number
        - ``name``/``ingredients``/``preparation`` are trimmed
        - an absent daily summary becomes all zero
        """
        if isinstance(payload, MealPlanDocument):
            plan: Mapping[str, Any] = payload.to_wire()
        elif "meal_plan" in payload:
            plan = payload["meal_plan"]
        else:
            plan = payload

        return MealPlanDocument(
            daily_summary=NormalizationService.normalize_daily_summary(plan.get("daily_summary")),
            meals=[NormalizationService.normalize_meal(meal) for meal in plan.get("meals") or []],
        )

    @staticmethod
    def normalize_multi_day(payload: Mapping[str, Any]) -> MultiDayPlanDocument:
        """Normalize a validated ``{"multi_day_plan": {...}}`` mapping."""
        plan: Mapping[str, Any] = payload.get("multi_day_plan", payload)
        days = []
        for day in plan.get("days") or []:
            name = _text(day.get("name")) or None
            days.append(
                DayPlan(
                    day_number=int(day["day_number"]),
                    name=name,
                    plan=NormalizationService.normalize(day["meal_plan"]),
                )
            )

        days.sort(key=lambda d: d.day_number)

        raw_summary: Dict[str, Any] = dict(plan.get("summary") or {})
        summary = MultiDaySummary(
            number_of_days=int(raw_summary.get("number_of_days", len(days))),
            average_kcal=_whole(raw_summary.get("average_kcal")),
            average_proteins=_whole(raw_summary.get("average_proteins")),
            average_fats=_whole(raw_summary.get("average_fats")),
            average_carbs=_whole(raw_summary.get("average_carbs")),
        )
        return MultiDayPlanDocument(days=days, summary=summary)
