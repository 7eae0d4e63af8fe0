"""
Tests for structure extraction and the wire codecs.

Covers:
- Locating the first balanced object in assistant prose
- Explicit "nothing found" versus syntax failures
- Tag revision decoding (case rules, lenient leaves, optional daily summary)
- The placeholder document used when nothing structured is present
"""

import pytest

from app.exceptions import MealPlanSyntaxError
from core.utils.helpers import (
    UnbalancedBlockError,
    find_object_span,
    iter_tag_blocks,
    parse_number,
    round_half_up,
    tag_text,
)
from domain.enums import ProtocolVersion
from services.extraction_service import (
    ExtractionService,
    JsonDocumentCodec,
    XmlDocumentCodec,
    get_codec,
)

from test_constants import (
    NAN_JSON_MESSAGE,
    PROSE_ONLY_MESSAGE,
    TRAILING_COMMA_JSON_MESSAGE,
    UNBALANCED_JSON_MESSAGE,
    VALID_MEAL_PLAN,
    XML_BAD_LEAVES,
    XML_MESSAGE,
    XML_UNCLOSED_MEALS,
    XML_WITHOUT_DAILY_SUMMARY,
)
from test_fixtures import json_message


# =============================================================================
# TEXT SCANNING HELPERS
# =============================================================================


def test_find_object_span_ignores_braces_inside_strings():
    text = 'Plan: {"note": "use a } and a { here", "n": {"x": 1}} trailing {'
    start, end = find_object_span(text)
    assert text[start:end] == '{"note": "use a } and a { here", "n": {"x": 1}}'


def test_find_object_span_handles_escaped_quotes():
    text = '{"note": "she said \\"hi}\\""}'
    assert find_object_span(text) == (0, len(text))


def test_find_object_span_none_without_brace():
    assert find_object_span("no structure at all") is None


def test_find_object_span_unbalanced_raises():
    with pytest.raises(UnbalancedBlockError):
        find_object_span('{"meal_plan": {"meals": []}')


def test_iter_tag_blocks_in_order_and_unclosed():
    blocks = list(iter_tag_blocks("<meal>a</meal> text <meal>b</meal>", "meal"))
    assert [b.inner for b in blocks] == ["a", "b"]

    with pytest.raises(UnbalancedBlockError):
        list(iter_tag_blocks("<meal>a</meal><meal>b", "meal"))


def test_tag_text_is_case_insensitive():
    assert tag_text("<NAME>Soup</name>", "name") == "Soup"
    assert tag_text("<title>Soup</title>", "name") is None


def test_parse_number_is_lenient():
    assert parse_number(" 12.5 ") == 12.5
    assert parse_number("lots") == 0.0
    assert parse_number(None) == 0.0
    assert parse_number("inf") == 0.0


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(54.5) == 55
    assert round_half_up(72.49) == 72


# =============================================================================
# JSON REVISION
# =============================================================================


def test_extract_json_from_prose():
    """
    Test extraction of the object embedded in assistant prose.

    Verifies:
    - Prose before and after the object is ignored
    - Braces inside string values do not end the object early
    - The decoded mapping is returned untouched (no normalization yet)
    """
    decoded = ExtractionService.extract(json_message(VALID_MEAL_PLAN), ProtocolVersion.JSON)

    assert decoded == VALID_MEAL_PLAN
    assert decoded["meal_plan"]["meals"][1]["preparation"].endswith("slice and toss with greens.")


def test_extract_returns_none_when_nothing_present():
    assert ExtractionService.extract(PROSE_ONLY_MESSAGE) is None
    assert ExtractionService.extract("") is None


@pytest.mark.parametrize(
    "message",
    [UNBALANCED_JSON_MESSAGE, TRAILING_COMMA_JSON_MESSAGE, NAN_JSON_MESSAGE, "Result: {1: 2}"],
)
def test_extract_json_syntax_failures(message):
    with pytest.raises(MealPlanSyntaxError) as exc_info:
        ExtractionService.extract(message, ProtocolVersion.JSON)
    assert exc_info.value.code == "SYNTAX_FAILURE"
    assert exc_info.value.http_status == 422


def test_json_loads_rejects_non_object():
    with pytest.raises(MealPlanSyntaxError):
        JsonDocumentCodec.loads("[1, 2, 3]")


def test_only_first_object_is_used():
    message = json_message(VALID_MEAL_PLAN) + '\n\n{"meal_plan": "second"}'
    decoded = ExtractionService.extract(message)
    assert decoded["meal_plan"]["daily_summary"]["kcal"] == 2000


def test_protocol_is_declared_not_sniffed():
    """A tag-revision message read as JSON has no object, so nothing is found"""
    assert ExtractionService.extract(XML_MESSAGE, ProtocolVersion.JSON) is None
    assert ExtractionService.extract(json_message(VALID_MEAL_PLAN), ProtocolVersion.XML) is None


def test_get_codec_accepts_string_protocol():
    assert isinstance(get_codec("json"), JsonDocumentCodec)
    assert isinstance(get_codec(ProtocolVersion.XML), XmlDocumentCodec)


# =============================================================================
# TAG REVISION
# =============================================================================


def test_extract_xml_message():
    """
    Test decoding of the legacy tag revision.

    Verifies:
    - Daily summary and meals are read into the wire shape
    - Leaf tags match regardless of case
    - Numbers are read as floats, text leaves are kept verbatim
    - Comments are carried alongside the plan
    """
    decoded = ExtractionService.extract(XML_MESSAGE, ProtocolVersion.XML)
    plan = decoded["meal_plan"]

    assert plan["daily_summary"] == {"kcal": 1800.0, "proteins": 120.0, "fats": 60.0, "carbs": 180.0}
    assert len(plan["meals"]) == 2
    assert plan["meals"][0]["summary"]["kcal"] == 350.5
    assert plan["meals"][1]["name"] == "Salmon with quinoa"
    assert plan["meals"][1]["ingredients"].startswith("salmon 150g")
    assert plan["meals"][1]["summary"]["protein"] == 45.0
    assert "quinoa portions" in decoded["comments"]


def test_extract_xml_without_daily_summary_omits_it():
    decoded = ExtractionService.extract(XML_WITHOUT_DAILY_SUMMARY, ProtocolVersion.XML)
    assert "daily_summary" not in decoded["meal_plan"]
    assert decoded["meal_plan"]["meals"][0]["name"] == "Lentil soup"


def test_extract_xml_lenient_leaves():
    decoded = ExtractionService.extract(XML_BAD_LEAVES, ProtocolVersion.XML)
    meal = decoded["meal_plan"]["meals"][0]
    assert meal["name"] == ""
    assert meal["summary"]["kcal"] == 0.0
    assert meal["summary"]["carb"] == 60.0


def test_extract_xml_unclosed_block_is_syntax_failure():
    with pytest.raises(MealPlanSyntaxError):
        ExtractionService.extract(XML_UNCLOSED_MEALS, ProtocolVersion.XML)


def test_extract_xml_nothing_present():
    assert ExtractionService.extract(PROSE_ONLY_MESSAGE, ProtocolVersion.XML) is None
    assert ExtractionService.extract("<meals></meals>", ProtocolVersion.XML) is None


def test_xml_container_tags_are_case_sensitive():
    message = XML_WITHOUT_DAILY_SUMMARY.replace("<meals>", "<MEALS>").replace("</meals>", "</MEALS>")
    assert ExtractionService.extract(message, ProtocolVersion.XML) is None


# =============================================================================
# PLACEHOLDER DOCUMENT
# =============================================================================


def test_extract_with_fallback_placeholder():
    """
    Test the placeholder built when a message carries no plan.

    Verifies:
    - Exactly one meal with an empty name
    - The whole message lands in the preparation field
    - All nutrition is zero and the placeholder is recognizable
    """
    document = ExtractionService.extract_with_fallback(PROSE_ONLY_MESSAGE)

    assert len(document.meals) == 1
    assert document.meals[0].name == ""
    assert document.meals[0].preparation == PROSE_ONLY_MESSAGE
    assert document.daily_summary.kcal == 0
    assert ExtractionService.is_fallback_document(document, PROSE_ONLY_MESSAGE)


def test_extract_with_fallback_parses_real_plan():
    message = json_message(VALID_MEAL_PLAN)
    document = ExtractionService.extract_with_fallback(message)

    assert len(document.meals) == 2
    assert not ExtractionService.is_fallback_document(document, message)


def test_extract_with_fallback_xml_accepts_missing_daily_summary():
    document = ExtractionService.extract_with_fallback(XML_WITHOUT_DAILY_SUMMARY, ProtocolVersion.XML)
    assert document.meals[0].summary.kcal == 390
    assert document.daily_summary.kcal == 0
