from __future__ import annotations

from typing import Optional

from app.config import settings
from app.exceptions import MealPlanSyntaxError, NotFoundError
from core.base.base_service import BaseService
from domain.enums import ParseStatus, ProtocolVersion
from domain.schemas.meal_plan_schemas import (
    DailySummary,
    MealPlanDocument,
    ParseOutcome,
    PatientTargets,
    ValidationIssue,
)
from services.comment_service import CommentService
from services.extraction_service import ExtractionService, get_codec
from services.normalization_service import NormalizationService
from services.reconciliation_service import ReconciliationService
from services.validation_service import ValidationService


class MealPlanService(BaseService):
    """
    Meal plan pipeline for a single assistant message:
    - extracts the structured block for the declared protocol
    - validates it against the structural contract (all issues collected)
    - normalizes field names, numbers and text
    - reconciles the daily summary against patient targets
    - reads the comment side-channel regardless of the plan's fate
    """

    def __init__(self, default_protocol: Optional[ProtocolVersion] = None):
        super().__init__("mealplan.service")
        self.default_protocol = ProtocolVersion(default_protocol or settings.default_protocol)

    def _protocol(self, protocol: Optional[ProtocolVersion]) -> ProtocolVersion:
        return ProtocolVersion(protocol) if protocol else self.default_protocol

    def parse(
        self,
        raw: str,
        protocol: Optional[ProtocolVersion] = None,
        targets: Optional[PatientTargets] = None,
    ) -> ParseOutcome:
        """
        Parse a message into a tagged outcome. Never raises for bad input:
        syntax failures, structural violations and missing documents are all
        reported through ``status`` and ``errors``.
        """
        protocol = self._protocol(protocol)
        codec = get_codec(protocol)
        comments = CommentService.extract_comments(raw, protocol)
        display_message = CommentService.strip_structure(raw, protocol)
        fallback_summary = ReconciliationService.resolve(DailySummary.zero(), targets)

        try:
            decoded = ExtractionService.extract(raw, protocol)
        except MealPlanSyntaxError as e:
            self.log_warning("Meal plan syntax failure", protocol=protocol.value, error=e.message)
            return ParseOutcome(
                status=ParseStatus.SYNTAX_FAILURE,
                daily_summary=fallback_summary,
                comments=comments,
                display_message=display_message,
                errors=[ValidationIssue(field="document", message=e.message)],
            )

        if decoded is None:
            self.log_info("No meal plan in message", protocol=protocol.value)
            return ParseOutcome(
                status=ParseStatus.NOT_FOUND,
                daily_summary=fallback_summary,
                comments=comments,
                display_message=display_message,
            )

        issues = ValidationService.validate(decoded, require_daily_summary=codec.requires_daily_summary)
        if issues:
            self.log_warning("Meal plan rejected", protocol=protocol.value, issues=len(issues))
            return ParseOutcome(
                status=ParseStatus.STRUCTURAL_VIOLATION,
                daily_summary=fallback_summary,
                comments=comments,
                display_message=display_message,
                errors=issues,
            )

        document = NormalizationService.normalize(decoded)
        daily_summary = ReconciliationService.resolve(document.daily_summary, targets)
        self.log_info(
            "Meal plan parsed",
            protocol=protocol.value,
            meals=len(document.meals),
            kcal=daily_summary.kcal,
        )
        return ParseOutcome(
            status=ParseStatus.OK,
            document=document,
            daily_summary=daily_summary,
            comments=comments,
            display_message=display_message,
        )

    def extract_document(self, raw: str, protocol: Optional[ProtocolVersion] = None) -> MealPlanDocument:
        """
        Strict variant of ``parse`` returning only the normalized document.

        Raises:
            MealPlanSyntaxError: If the embedded block cannot be parsed
            MealPlanStructureError: If the block violates the structural contract
            NotFoundError: If the message holds no structured block
        """
        protocol = self._protocol(protocol)
        decoded = ExtractionService.extract(raw, protocol)
        if decoded is None:
            raise NotFoundError("No structured meal plan found in message", code="NOT_FOUND")
        ValidationService.assert_valid(decoded, require_daily_summary=get_codec(protocol).requires_daily_summary)
        return NormalizationService.normalize(decoded)

    def comments(self, raw: str, protocol: Optional[ProtocolVersion] = None) -> tuple[Optional[str], str]:
        """Comments and display text for a message, independent of plan validity."""
        protocol = self._protocol(protocol)
        return (
            CommentService.extract_comments(raw, protocol),
            CommentService.strip_structure(raw, protocol),
        )
