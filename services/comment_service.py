"""
Comment side-channel and display text for assistant messages.

Comments are read independently of the meal plan: a plan that fails to
parse or validate still has its commentary surfaced.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Optional
from xml.sax.saxutils import unescape

from app.config import settings
from core.utils.helpers import (
    UnbalancedBlockError,
    collapse_blank_lines,
    find_object_span,
    strip_tags,
    tag_text,
)
from domain.enums import ProtocolVersion

logger = logging.getLogger("mealplan.comments")

PLAN_BLOCK_TAGS = ("meal_plan", "daily_summary", "meals")


class CommentService:
    @staticmethod
    def extract_comments(raw: str, protocol: ProtocolVersion = ProtocolVersion.JSON) -> Optional[str]:
        """
        Return the free-text commentary attached to an assistant message.

        JSON revision: the ``comments`` string of the first balanced top-level
        object. Absent, non-string or empty values, and objects that do not
        parse, give None.

        Tag revision: the trimmed content of the first ``<comments>`` block
        (any case); an empty block gives ``""``.
        """
        raw = raw or ""
        if ProtocolVersion(protocol) == ProtocolVersion.XML:
            content = tag_text(raw, "comments")
            return unescape(content).strip() if content is not None else None

        try:
            span = find_object_span(raw)
        except UnbalancedBlockError:
            return None
        if span is None:
            return None

        try:
            parsed = json.loads(raw[span[0]:span[1]])
        except ValueError:
            logger.debug("Comments lookup skipped: embedded object is not valid JSON")
            return None

        if isinstance(parsed, dict):
            comments = parsed.get("comments")
            if isinstance(comments, str) and comments:
                return comments.strip()
        return None

    @staticmethod
    def strip_structure(
        raw: str,
        protocol: ProtocolVersion = ProtocolVersion.JSON,
        empty_message: Optional[str] = None,
    ) -> str:
        """
        Produce the chat text for a message with its structured block removed.

        Comments are kept (and moved to the front when removing the block would
        otherwise drop them). Runs of blank lines are collapsed. For the JSON
        revision a message holding nothing but the plan becomes
        ``empty_message`` (the configured placeholder by default).
        """
        raw = raw or ""
        comments = CommentService.extract_comments(raw, protocol)

        if ProtocolVersion(protocol) == ProtocolVersion.XML:
            cleaned = raw
            for tag in PLAN_BLOCK_TAGS:
                cleaned = re.sub(
                    rf"<{tag}\s*>.*?</{tag}\s*>", "", cleaned, flags=re.IGNORECASE | re.DOTALL
                )
            cleaned = collapse_blank_lines(unescape(strip_tags(cleaned)))
            if comments and comments not in cleaned:
                cleaned = comments + ("\n\n" + cleaned if cleaned else "")
            return cleaned.strip()

        cleaned = raw.strip()
        try:
            span = find_object_span(cleaned)
        except UnbalancedBlockError:
            span = None
        if span is not None:
            cleaned = cleaned[:span[0]] + cleaned[span[1]:]

        cleaned = collapse_blank_lines(cleaned)
        if comments and comments not in cleaned:
            cleaned = comments + ("\n\n" + cleaned if cleaned else "")

        if empty_message is None:
            empty_message = settings.empty_display_message
        return cleaned.strip() or empty_message
