"""
Domain layer - Enums and schemas for meal plan documents.
"""

from domain import enums, schemas

__all__ = ["enums", "schemas"]
