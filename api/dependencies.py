"""
API dependencies for dependency injection
"""

from services.meal_plan_service import MealPlanService


def get_meal_plan_service() -> MealPlanService:
    """
    Meal plan service dependency for FastAPI routes.

    Usage:
        @router.post("/example")
        def example(service: MealPlanService = Depends(get_meal_plan_service)):
            return service.parse(...)
    """
    return MealPlanService()
