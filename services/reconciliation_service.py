"""
Daily summary reconciliation from patient targets.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from core.utils.helpers import round_half_up
from domain.schemas.meal_plan_schemas import (
    DailySummary,
    DayPlan,
    MacroDistribution,
    MultiDaySummary,
    PatientTargets,
)

logger = logging.getLogger("mealplan.reconciliation")

# Energy density, kcal per gram
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARB = 4
KCAL_PER_GRAM_FAT = 9


class ReconciliationService:
    @staticmethod
    def calculate_from_targets(
        target_kcal: Optional[float],
        distribution: Optional[MacroDistribution],
    ) -> DailySummary:
        """
        Compute daily totals from a calorie target and macro split.

        proteins = kcal * p% / 100 / 4, fats = kcal * f% / 100 / 9,
        carbs = kcal * c% / 100 / 4, each rounded half-up.

        Returns:
            The computed summary, or an all-zero summary when the target is
            missing or zero or the distribution is missing
        """
        if not target_kcal or distribution is None:
            return DailySummary.zero()

        return DailySummary(
            kcal=round_half_up(target_kcal),
            proteins=round_half_up(target_kcal * distribution.p_perc / 100 / KCAL_PER_GRAM_PROTEIN),
            fats=round_half_up(target_kcal * distribution.f_perc / 100 / KCAL_PER_GRAM_FAT),
            carbs=round_half_up(target_kcal * distribution.c_perc / 100 / KCAL_PER_GRAM_CARB),
        )

    @staticmethod
    def resolve(parsed: DailySummary, targets: Optional[PatientTargets] = None) -> DailySummary:
        """
        Pick the daily summary to show.

        A parsed summary with positive ``kcal`` wins unchanged, even when the
        targets disagree. Otherwise the summary is computed from the targets.
        Insufficient targets give all zeros rather than an error.
        """
        if parsed.kcal > 0:
            return parsed

        if targets is None:
            logger.info("Daily summary missing and no targets supplied; using zeros")
            return DailySummary.zero()

        resolved = ReconciliationService.calculate_from_targets(
            targets.target_kcal, targets.macro_distribution
        )
        logger.info("Daily summary reconciled from targets: kcal=%d", resolved.kcal)
        return resolved

    @staticmethod
    def summarize_days(days: Iterable[DayPlan]) -> MultiDaySummary:
        """Day count and rounded per-day averages of the daily summaries."""
        summaries = [day.plan.daily_summary for day in days]
        count = len(summaries)
        if count == 0:
            return MultiDaySummary(number_of_days=0)

        return MultiDaySummary(
            number_of_days=count,
            average_kcal=round_half_up(sum(s.kcal for s in summaries) / count),
            average_proteins=round_half_up(sum(s.proteins for s in summaries) / count),
            average_fats=round_half_up(sum(s.fats for s in summaries) / count),
            average_carbs=round_half_up(sum(s.carbs for s in summaries) / count),
        )
