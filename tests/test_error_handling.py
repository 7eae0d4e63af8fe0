"""
Error handling and edge case tests for the HTTP layer.

Covers:
- Request validation failures (missing fields, bad enum values)
- Unexpected service errors mapped to 500 envelopes
- Exception attributes used by the handlers
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import MealPlanStructureError, MealPlanSyntaxError, NotFoundError, ServiceValidationError
from domain.schemas.meal_plan_schemas import MacroDistribution, PatientTargets, ValidationIssue
from main import app
from services.meal_plan_service import MealPlanService

from test_constants import VALID_MEAL_PLAN
from test_fixtures import client, json_message


# =============================================================================
# REQUEST VALIDATION
# =============================================================================


def test_missing_message_is_rejected():
    r = client.post("/meal-plans/parse", json={})

    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "timestamp" in body


def test_unknown_protocol_is_rejected():
    r = client.post("/meal-plans/parse", json={"message": "hi", "protocol": "yaml"})
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_invalid_targets_are_rejected():
    targets = {"target_kcal": -100, "target_macro_distribution": {"p_perc": 130, "f_perc": 25, "c_perc": 45}}
    r = client.post("/meal-plans/daily-summary", json={"targets": targets})
    assert r.status_code == 422


def test_oversized_calorie_target_is_rejected():
    """Out-of-range targets fail request validation instead of reaching the rounding step"""
    targets = {"target_kcal": 1e308, "target_macro_distribution": {"p_perc": 30, "f_perc": 25, "c_perc": 45}}
    r = client.post("/meal-plans/daily-summary", json={"targets": targets})

    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_patient_targets_bounds():
    distribution = MacroDistribution(p_perc=30, f_perc=25, c_perc=45)
    assert PatientTargets(target_kcal=10000, macro_distribution=distribution).target_kcal == 10000

    for value in (10001, 1e308, float("inf"), float("nan")):
        with pytest.raises(PydanticValidationError):
            PatientTargets(target_kcal=value, macro_distribution=distribution)


def test_unknown_chat_role_is_rejected():
    messages = [{"role": "system", "content": "You are a dietitian"}]
    r = client.post("/chat/current-meal-plan", json={"messages": messages})
    assert r.status_code == 422


def test_multi_day_summary_requires_days():
    r = client.post("/multi-day-plans/summary", json={"days": []})
    assert r.status_code == 422


# =============================================================================
# UNEXPECTED ERRORS
# =============================================================================


def test_unexpected_error_in_extract_returns_500(monkeypatch):
    """
    Test that a crash inside the service is reported, not leaked.

    Verifies:
    - Route converts the failure into an HTTP 500
    - Response uses the standard error envelope
    """

    def boom(self, raw, protocol=None):
        raise RuntimeError("codec exploded")

    monkeypatch.setattr(MealPlanService, "extract_document", boom)

    r = client.post("/meal-plans/extract", json={"message": json_message(VALID_MEAL_PLAN)})

    assert r.status_code == 500
    assert r.json()["error"]["code"] == "HTTP_500"
    assert "codec exploded" in r.json()["error"]["message"]


def test_unhandled_error_uses_general_handler(monkeypatch):
    def boom(self, raw, protocol=None):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(MealPlanService, "comments", boom)
    local_client = TestClient(app, raise_server_exceptions=False)

    r = local_client.post("/meal-plans/comments", json={"message": "hello"})

    assert r.status_code == 500
    assert r.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"


# =============================================================================
# EXCEPTION ATTRIBUTES
# =============================================================================


def test_exception_attributes():
    syntax = MealPlanSyntaxError("Failed to parse JSON: bad")
    assert isinstance(syntax, ServiceValidationError)
    assert syntax.to_dict() == {"message": "Failed to parse JSON: bad", "code": "SYNTAX_FAILURE"}

    issues = [
        ValidationIssue(field="meal_plan.meals", message="meals must be a non-empty array"),
        ValidationIssue(field="meal_plan.daily_summary", message="Missing required field: meal_plan.daily_summary"),
    ]
    structure = MealPlanStructureError(issues)
    assert structure.http_status == 422
    assert str(structure).startswith("Meal plan structure is invalid.")
    assert structure.to_dict()["details"]["errors"][0]["field"] == "meal_plan.meals"

    not_found = NotFoundError("No structured meal plan found in message", code="NOT_FOUND")
    assert not_found.http_status == 404
    assert not_found.to_dict()["code"] == "NOT_FOUND"
