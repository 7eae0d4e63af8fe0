"""
Structure extraction: locating and decoding the plan embedded in an assistant message.

Two wire revisions exist. The JSON revision is canonical; the tag revision is
kept so older conversations still open. Both are implementations of
``DocumentCodec`` and are picked by declared protocol, never by sniffing the
message.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape, unescape

from app.exceptions import MealPlanSyntaxError
from core.utils.helpers import (
    UnbalancedBlockError,
    find_object_span,
    find_tag_block,
    iter_tag_blocks,
    parse_number,
    tag_text,
)
from domain.enums import ProtocolVersion
from domain.schemas.meal_plan_schemas import DailySummary, Meal, MealPlanDocument, MealSummary
from services.normalization_service import NormalizationService
from services.validation_service import ValidationService

logger = logging.getLogger("mealplan.extraction")


class DocumentCodec(ABC):
    """Reads and writes one wire revision of the structured block."""

    protocol: ProtocolVersion
    requires_daily_summary: bool = True

    @abstractmethod
    def decode(self, raw: str) -> Optional[Dict[str, Any]]:
        """
        Decode the structured block found in ``raw``.

        Returns:
            The top-level mapping in wire shape, or None when the message holds
            no structured block at all.

        Raises:
            MealPlanSyntaxError: a block is present but cannot be parsed.
        """

    @abstractmethod
    def encode(self, document: MealPlanDocument, comments: Optional[str] = None) -> str:
        """Serialize a document in this revision's wire form."""


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-finite number literal {name} is not allowed")


class JsonDocumentCodec(DocumentCodec):
    protocol = ProtocolVersion.JSON
    requires_daily_summary = True

    def locate(self, raw: str) -> Optional[str]:
        """Return the text of the first balanced top-level object, or None."""
        try:
            span = find_object_span(raw)
        except UnbalancedBlockError as e:
            raise MealPlanSyntaxError(f"Failed to parse JSON: {e}") from e
        if span is None:
            return None
        return raw[span[0]:span[1]]

    def decode(self, raw: str) -> Optional[Dict[str, Any]]:
        block = self.locate(raw)
        if block is None:
            return None
        return self.loads(block)

    @staticmethod
    def loads(block: str) -> Dict[str, Any]:
        try:
            parsed = json.loads(block, parse_constant=_reject_constant)
        except ValueError as e:
            # JSONDecodeError is a ValueError subclass
            raise MealPlanSyntaxError(
                f"Failed to parse JSON: {e}. Please ensure the response is valid JSON."
            ) from e
        if not isinstance(parsed, dict):
            raise MealPlanSyntaxError("Failed to parse JSON: top-level value must be an object")
        return parsed

    def encode(self, document: MealPlanDocument, comments: Optional[str] = None) -> str:
        payload: Dict[str, Any] = {"meal_plan": document.to_wire()}
        if comments is not None:
            payload["comments"] = comments
        return json.dumps(payload, ensure_ascii=False, indent=2)


class XmlDocumentCodec(DocumentCodec):
    """
    Legacy tag revision.

    Container tags (daily_summary, meals, meal, summary) are matched
    case-sensitively, leaf tags case-insensitively. Leaves are read leniently:
    a missing or unreadable number is 0 and a missing text leaf is empty, so
    the structural validator decides what is acceptable.
    """

    protocol = ProtocolVersion.XML
    requires_daily_summary = False

    DAILY_FIELDS = ("kcal", "proteins", "fats", "carbs")
    MEAL_SUMMARY_FIELDS = ("kcal", "protein", "fat", "carb")
    MEAL_TEXT_FIELDS = ("name", "ingredients", "preparation")

    def decode(self, raw: str) -> Optional[Dict[str, Any]]:
        try:
            meals_block = find_tag_block(raw, "meals")
            if meals_block is None:
                return None
            meals = [self._decode_meal(block.inner) for block in iter_tag_blocks(meals_block.inner, "meal")]
            if not meals:
                return None
            daily_block = find_tag_block(raw, "daily_summary")
        except UnbalancedBlockError as e:
            raise MealPlanSyntaxError(f"Failed to parse meal plan tags: {e}") from e

        plan: Dict[str, Any] = {"meals": meals}
        if daily_block is not None:
            plan["daily_summary"] = {
                field: parse_number(tag_text(daily_block.inner, field)) for field in self.DAILY_FIELDS
            }
        decoded: Dict[str, Any] = {"meal_plan": plan}
        comments = tag_text(raw, "comments")
        if comments is not None:
            decoded["comments"] = unescape(comments)
        return decoded

    def _decode_meal(self, inner: str) -> Dict[str, Any]:
        summary_block = find_tag_block(inner, "summary")
        if summary_block is None:
            summary_text, outer = "", inner
        else:
            # text leaves are read outside the nested summary only
            summary_text = summary_block.inner
            outer = inner[:summary_block.start] + inner[summary_block.end:]

        meal: Dict[str, Any] = {
            field: unescape(tag_text(outer, field) or "") for field in self.MEAL_TEXT_FIELDS
        }
        meal["summary"] = {
            field: parse_number(tag_text(summary_text, field)) for field in self.MEAL_SUMMARY_FIELDS
        }
        return meal

    def encode(self, document: MealPlanDocument, comments: Optional[str] = None) -> str:
        ds = document.daily_summary
        lines: List[str] = [
            "<meal_plan>",
            "<daily_summary>",
            f"<kcal>{ds.kcal}</kcal>",
            f"<proteins>{ds.proteins}</proteins>",
            f"<fats>{ds.fats}</fats>",
            f"<carbs>{ds.carbs}</carbs>",
            "</daily_summary>",
            "<meals>",
        ]
        for meal in document.meals:
            lines.extend(
                [
                    "<meal>",
                    f"<name>{escape(meal.name)}</name>",
                    f"<ingredients>{escape(meal.ingredients)}</ingredients>",
                    f"<preparation>{escape(meal.preparation)}</preparation>",
                    "<summary>",
                    f"<kcal>{meal.summary.kcal}</kcal>",
                    f"<protein>{meal.summary.p}</protein>",
                    f"<fat>{meal.summary.f}</fat>",
                    f"<carb>{meal.summary.c}</carb>",
                    "</summary>",
                    "</meal>",
                ]
            )
        lines.extend(["</meals>", "</meal_plan>"])
        if comments is not None:
            lines.append(f"<comments>{escape(comments)}</comments>")
        return "\n".join(lines)


_CODECS: Dict[ProtocolVersion, DocumentCodec] = {
    ProtocolVersion.JSON: JsonDocumentCodec(),
    ProtocolVersion.XML: XmlDocumentCodec(),
}


def get_codec(protocol: ProtocolVersion | str) -> DocumentCodec:
    """Return the codec registered for a protocol revision."""
    return _CODECS[ProtocolVersion(protocol)]


class ExtractionService:
    @staticmethod
    def extract(raw: str, protocol: ProtocolVersion = ProtocolVersion.JSON) -> Optional[Dict[str, Any]]:
        """
        Decode the structured block of an assistant message.

        Args:
            raw: Complete assistant message, prose included
            protocol: Wire revision the message was produced under

        Returns:
            The decoded wire mapping, or None when nothing structured is present

        Raises:
            MealPlanSyntaxError: If a block is present but malformed
        """
        protocol = ProtocolVersion(protocol)
        decoded = get_codec(protocol).decode(raw or "")
        if decoded is None:
            logger.info("No structured block found (protocol=%s, length=%d)", protocol.value, len(raw or ""))
        return decoded

    @staticmethod
    def fallback_document(raw: str) -> MealPlanDocument:
        """Single-meal placeholder carrying the whole message as preparation text."""
        return MealPlanDocument(
            daily_summary=DailySummary.zero(),
            meals=[Meal(name="", ingredients="", preparation=raw, summary=MealSummary())],
        )

    @staticmethod
    def is_fallback_document(document: MealPlanDocument, raw: str) -> bool:
        """True when ``document`` is the placeholder built for ``raw``, i.e. nothing was parsed."""
        if len(document.meals) != 1:
            return False
        meal = document.meals[0]
        return meal.name == "" and meal.preparation == raw

    @staticmethod
    def extract_with_fallback(raw: str, protocol: ProtocolVersion = ProtocolVersion.JSON) -> MealPlanDocument:
        """
        Extract, validate and normalize, substituting the placeholder document when
        the message holds no structured block.

        Raises:
            MealPlanSyntaxError: If a block is present but malformed
            MealPlanStructureError: If the block violates the structural contract
        """
        decoded = ExtractionService.extract(raw, protocol)
        if decoded is None:
            return ExtractionService.fallback_document(raw or "")
        codec = get_codec(protocol)
        ValidationService.assert_valid(decoded, require_daily_summary=codec.requires_daily_summary)
        return NormalizationService.normalize(decoded)
