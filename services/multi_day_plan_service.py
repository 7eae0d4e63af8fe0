from __future__ import annotations

import logging
from typing import Iterable

from app.exceptions import NotFoundError
from domain.enums import ProtocolVersion
from domain.schemas.meal_plan_schemas import DayPlan, MultiDayPlanDocument, MultiDaySummary
from services.extraction_service import ExtractionService
from services.normalization_service import NormalizationService
from services.reconciliation_service import ReconciliationService
from services.validation_service import ValidationService

logger = logging.getLogger("mealplan.multi_day")


class MultiDayPlanService:
    """
    Multi-day plans (up to a week) travel as a ``multi_day_plan`` JSON object
    holding per-day plans plus an averaged summary. Only the JSON revision
    exists for them.
    """

    @staticmethod
    def parse(raw: str, recalculate_summary: bool = False) -> MultiDayPlanDocument:
        """
        Extract, validate and normalize a multi-day plan.

        Args:
            raw: Assistant message containing the plan
            recalculate_summary: Replace the assistant's summary with one
                computed from the days

        Raises:
            MealPlanSyntaxError: If the embedded object cannot be parsed
            MealPlanStructureError: If any day or the summary is invalid
            NotFoundError: If the message holds no object at all
        """
        decoded = ExtractionService.extract(raw, ProtocolVersion.JSON)
        if decoded is None:
            raise NotFoundError("No structured multi-day plan found in message", code="NOT_FOUND")

        ValidationService.assert_valid_multi_day(decoded)
        document = NormalizationService.normalize_multi_day(decoded)

        logger.info(
            "Multi-day plan parsed: days=%d meals=%d",
            len(document.days),
            sum(len(d.plan.meals) for d in document.days),
        )

        if recalculate_summary:
            document = document.model_copy(
                update={"summary": MultiDayPlanService.summarize(document.days)}
            )
        return document

    @staticmethod
    def summarize(days: Iterable[DayPlan]) -> MultiDaySummary:
        return ReconciliationService.summarize_days(days)
