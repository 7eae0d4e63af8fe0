from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import ChatRole, ProtocolVersion
from domain.schemas.meal_plan_schemas import ChatMessage, MealPlanDocument
from services.meal_plan_service import MealPlanService

logger = logging.getLogger("mealplan.chat")


class ChatService:
    @staticmethod
    def last_assistant_message(history: List[ChatMessage]) -> Optional[ChatMessage]:
        for message in reversed(history):
            if message.role == ChatRole.ASSISTANT:
                return message
        return None

    @staticmethod
    def extract_current_meal_plan(
        history: List[ChatMessage],
        protocol: Optional[ProtocolVersion] = None,
    ) -> Optional[MealPlanDocument]:
        """
        Return the plan carried by the most recent assistant message.

        Returns:
            The normalized document, or None when there is no assistant message,
            the message holds no plan, or the plan fails to parse or validate
        """
        message = ChatService.last_assistant_message(history)
        if message is None:
            return None

        try:
            return MealPlanService(protocol).extract_document(message.content)
        except NotFoundError:
            return None
        except ServiceValidationError as e:
            logger.warning("Latest assistant message has no usable meal plan: %s", e)
            return None

    @staticmethod
    def validate_chat_message(text: str, max_length: Optional[int] = None) -> Tuple[bool, Optional[str]]:
        """
        Check user input before it is sent to the assistant.

        Returns:
            ``(True, None)`` when acceptable, otherwise ``(False, reason)``
        """
        limit = max_length or settings.max_message_length
        trimmed = (text or "").strip()
        if not trimmed:
            return False, "Message cannot be empty."
        if len(trimmed) > limit:
            return False, "Message too long. Please shorten your message."
        return True, None
