"""API routes package"""

from . import health, meal_plans, chat, multi_day_plans

__all__ = ["health", "meal_plans", "chat", "multi_day_plans"]
