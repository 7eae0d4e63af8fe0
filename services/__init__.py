"""Services package - Business logic layer"""

from services.extraction_service import ExtractionService, DocumentCodec, get_codec
from services.validation_service import ValidationService
from services.normalization_service import NormalizationService
from services.comment_service import CommentService
from services.reconciliation_service import ReconciliationService
from services.meal_plan_service import MealPlanService
from services.multi_day_plan_service import MultiDayPlanService
from services.chat_service import ChatService
from services.form_service import FormService

__all__ = [
    "ExtractionService",
    "DocumentCodec",
    "get_codec",
    "ValidationService",
    "NormalizationService",
    "CommentService",
    "ReconciliationService",
    "MealPlanService",
    "MultiDayPlanService",
    "ChatService",
    "FormService",
]
