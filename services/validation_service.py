"""
Structural validation of decoded meal plan documents.

Every violation is collected; a document with K independent problems yields
K issues, each addressed by a dotted path such as
``meal_plan.meals[1].summary.kcal``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence, Type, Union

from pydantic import BaseModel, ValidationError

from app.exceptions import MealPlanStructureError
from domain.schemas.meal_plan_schemas import ValidationIssue
from domain.schemas.wire_schemas import (
    LegacyMealPlanEnvelope,
    MealPlanEnvelope,
    MultiDayPlanEnvelope,
)

logger = logging.getLogger("mealplan.validation")

POSITIVE = "must be a positive number"
NON_NEGATIVE = "must be a non-negative number"

RULES: Dict[str, str] = {
    "kcal": POSITIVE,
    "proteins": NON_NEGATIVE,
    "fats": NON_NEGATIVE,
    "carbs": NON_NEGATIVE,
    "protein": NON_NEGATIVE,
    "fat": NON_NEGATIVE,
    "carb": NON_NEGATIVE,
    "average_kcal": NON_NEGATIVE,
    "average_proteins": NON_NEGATIVE,
    "average_fats": NON_NEGATIVE,
    "average_carbs": NON_NEGATIVE,
    "name": "must be a non-empty string",
    "ingredients": "must be a string",
    "preparation": "must be a string",
    "meals": "must be a non-empty array",
    "days": "must be a non-empty array",
    "day_number": "must be a number between 1 and 7",
    "number_of_days": "must be a number between 1 and 7",
}

OBJECT_ERRORS = {"model_type", "model_attributes_type", "dict_type"}


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """('meal_plan', 'meals', 0, 'name') -> 'meal_plan.meals[0].name'"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _issue_from_error(error: Mapping[str, Any]) -> ValidationIssue:
    loc = error.get("loc", ())
    path = format_path(loc) or "document"
    leaf = loc[-1] if loc else ""
    error_type = error.get("type", "")

    if error_type == "missing":
        message = f"Missing required field: {path}"
    elif error_type in OBJECT_ERRORS or isinstance(leaf, int):
        message = f"{path.rsplit('.', 1)[-1]} must be an object"
    else:
        rule = RULES.get(str(leaf))
        message = f"{leaf} {rule}" if rule else error.get("msg", "Invalid value")
    return ValidationIssue(field=path, message=message)


def collect_issues(payload: Any, schema: Type[BaseModel]) -> List[ValidationIssue]:
    """Validate ``payload`` against ``schema`` and translate every error into an issue."""
    try:
        schema.model_validate(payload)
    except ValidationError as e:
        return [_issue_from_error(err) for err in e.errors()]
    return []


class ValidationService:
    @staticmethod
    def validate(payload: Any, require_daily_summary: bool = True) -> List[ValidationIssue]:
        """
        Check a decoded single-day document against the structural contract.

        Rules:
        - ``meal_plan`` present; ``daily_summary`` present (unless the wire
          revision allows it to be reconciled later) with positive ``kcal`` and
          non-negative macros
        - ``meals`` a non-empty array
        - each meal: non-blank ``name``, string ``ingredients``/``preparation``,
          ``summary`` with positive ``kcal`` and non-negative macros

        Args:
            payload: Top-level decoded mapping, e.g. ``{"meal_plan": {...}}``
            require_daily_summary: Whether an absent daily summary is a violation

        Returns:
            All issues found; an empty list means the document is valid
        """
        schema = MealPlanEnvelope if require_daily_summary else LegacyMealPlanEnvelope
        issues = collect_issues(payload, schema)
        if issues:
            logger.info("Meal plan failed validation with %d issue(s)", len(issues))
        return issues

    @staticmethod
    def assert_valid(payload: Any, require_daily_summary: bool = True) -> None:
        """Raise MealPlanStructureError carrying every issue, if there are any."""
        issues = ValidationService.validate(payload, require_daily_summary=require_daily_summary)
        if issues:
            raise MealPlanStructureError(issues)

    @staticmethod
    def validate_multi_day(payload: Any) -> List[ValidationIssue]:
        """Same contract as ``validate`` for every day, plus day numbering and plan summary rules."""
        issues = collect_issues(payload, MultiDayPlanEnvelope)
        if issues:
            logger.info("Multi-day plan failed validation with %d issue(s)", len(issues))
        return issues

    @staticmethod
    def assert_valid_multi_day(payload: Any) -> None:
        issues = ValidationService.validate_multi_day(payload)
        if issues:
            raise MealPlanStructureError(
                issues,
                message="Multi-day meal plan structure is invalid. "
                + "; ".join(f"{i.field}: {i.message}" for i in issues),
            )
