from __future__ import annotations

import logging
from typing import Optional

from app.exceptions import ServiceValidationError
from domain.enums import ProtocolVersion
from domain.schemas.meal_plan_schemas import MealPlanFormState, PatientTargets
from services.extraction_service import ExtractionService
from services.reconciliation_service import ReconciliationService

logger = logging.getLogger("mealplan.form")


class FormService:
    @staticmethod
    def seed_form(
        raw: str,
        protocol: ProtocolVersion = ProtocolVersion.JSON,
        targets: Optional[PatientTargets] = None,
        plan_name: str = "",
    ) -> MealPlanFormState:
        """
        Build the editable form from an assistant message.

        When the message has no usable plan the form gets a single blank meal
        whose preparation holds the whole message, so nothing the assistant
        wrote is lost. The daily summary is reconciled against the targets.
        """
        try:
            document = ExtractionService.extract_with_fallback(raw, protocol)
        except ServiceValidationError as e:
            logger.warning("Seeding form from unparsed message: %s", e)
            document = ExtractionService.fallback_document(raw or "")

        return MealPlanFormState(
            plan_name=plan_name,
            meals=list(document.meals),
            daily_summary=ReconciliationService.resolve(document.daily_summary, targets),
        )

    @staticmethod
    def validate_form(state: MealPlanFormState) -> Optional[str]:
        """Return the first problem preventing a save, or None."""
        if not state.plan_name.strip():
            return "Plan name is required"
        if not state.meals:
            return "At least one meal is required"
        for idx, meal in enumerate(state.meals, start=1):
            if not meal.name.strip():
                return f"Meal {idx} name is required"
        return None

    @staticmethod
    def is_form_ready(state: MealPlanFormState, is_loading: bool = False) -> bool:
        if is_loading:
            return False
        return FormService.validate_form(state) is None
