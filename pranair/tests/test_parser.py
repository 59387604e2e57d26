import json

import pytest

from pranair.api.core.errors import ProviderWarmingUp, ResponseParseError
from pranair.api.llm.parser import (
    ResponseParser,
    extract_json_block,
    normalize_confidence,
    normalize_posture,
    normalize_severity,
)
from pranair.api.schemas.distress import Posture

parser = ResponseParser()

GEMINI_ANSWER = """Here is my assessment of the scene:
{
  "human_visible": true,
  "number_of_people": 1,
  "body_posture": "collapsed",
  "movement_observed": false,
  "visible_blood": true,
  "signs_of_distress": ["face down", "no visible breathing"],
  "confidence": 0.82,
  "summary": "One adult collapsed on the pavement"
}
Please contact emergency services."""


def test_extract_json_block_ignores_surrounding_prose():
    block = extract_json_block(GEMINI_ANSWER)
    assert block is not None
    assert json.loads(block)["body_posture"] == "collapsed"


def test_extract_json_block_skips_braces_in_trailing_prose():
    text = 'Result: {"emergency": true} and a note {not json}'
    assert json.loads(extract_json_block(text)) == {"emergency": True}


def test_extract_json_block_without_braces():
    assert extract_json_block("The model is unsure, no data.") is None


def test_parse_observation_maps_fields():
    obs = parser.parse_observation(GEMINI_ANSWER)
    assert obs.number_of_people == 1
    assert obs.body_posture is Posture.collapsed
    assert obs.visible_blood is True
    assert obs.movement_observed is False
    assert obs.signs_of_distress == ["face down", "no visible breathing"]
    assert obs.confidence == pytest.approx(0.82)


def test_parse_observation_is_idempotent():
    assert parser.parse_observation(GEMINI_ANSWER) == parser.parse_observation(GEMINI_ANSWER)


def test_parse_observation_without_json_fails():
    with pytest.raises(ResponseParseError) as excinfo:
        parser.parse_observation("I cannot analyze this image.")
    assert excinfo.value.raw == "I cannot analyze this image."


def test_parse_observation_defaults_missing_fields():
    obs = parser.parse_observation("{}")
    assert obs.number_of_people == 0
    assert obs.body_posture is Posture.unknown
    assert obs.movement_observed is False
    assert obs.signs_of_distress == []
    assert obs.confidence == 0.0


def test_parse_observation_accepts_camel_case():
    obs = parser.parse_observation(
        '{"humanVisible": "yes", "bodyPosture": "Lying down", "appearsMotionless": true, "signsOfDistress": "pale, sweating"}'
    )
    assert obs.number_of_people == 1
    assert obs.body_posture is Posture.lying
    assert obs.movement_observed is False
    assert obs.signs_of_distress == ["pale", "sweating"]


def test_parse_observation_non_finite_numbers_fall_back():
    obs = parser.parse_observation('{"number_of_people": 1, "confidence": NaN}')
    assert obs.number_of_people == 1
    assert obs.confidence == 0.0

    obs = parser.parse_observation('{"human_visible": true, "number_of_people": 1e999, "confidence": Infinity}')
    assert obs.number_of_people == 1
    assert obs.confidence == 0.0

    assert parser.parse_observation('{"number_of_people": -Infinity}').number_of_people == 0


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("standing", Posture.standing),
        ("Sitting on a bench", Posture.sitting),
        ("unconscious on the floor", Posture.collapsed),
        ("lying on the ground", Posture.lying),
        ("unclear position", Posture.unknown),
        (None, Posture.unknown),
    ],
)
def test_normalize_posture(raw, expected):
    assert normalize_posture(raw) is expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0.4, 0.4),
        (85, 0.85),
        ("90%", 0.9),
        ("high", 0.9),
        (-2, 0.0),
        (250, 1.0),
        ("n/a", 0.0),
        (None, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        ("NaN", 0.0),
    ],
)
def test_normalize_confidence(raw, expected):
    assert normalize_confidence(raw) == pytest.approx(expected)


def test_parse_detections_reads_array():
    body = json.dumps(
        [
            {"label": "person", "score": 0.91, "box": {"xmin": 1, "ymin": 2, "xmax": 3, "ymax": 4}},
            {"label": "dog", "score": 0.5},
        ]
    )
    detections = parser.parse_detections(body)
    assert [d.label for d in detections] == ["person", "dog"]


def test_parse_detections_skips_malformed_items():
    detections = parser.parse_detections(
        '[{"label": "person", "score": 0.8}, {"score": "oops"}, {"label": "person", "score": NaN}]'
    )
    assert len(detections) == 1


def test_parse_detections_loading_model():
    with pytest.raises(ProviderWarmingUp):
        parser.parse_detections('{"error": "Model facebook/detr-resnet-50 is currently loading", "estimated_time": 20.0}')


def test_parse_detections_rejects_other_objects():
    with pytest.raises(ResponseParseError):
        parser.parse_detections('{"error": "Authorization header is invalid"}')


def test_parse_detections_rejects_plain_text():
    with pytest.raises(ResponseParseError):
        parser.parse_detections("<html>Bad gateway</html>")


def test_parse_triage_full_answer():
    text = (
        'Sure! {"emergency": true, "category": "cardiac arrest", "severity": "CRITICAL", "priority": 1, '
        '"suggested_drone_kit": ["AED", "oxygen"], "recommended_action": "Dispatch AED drone"}'
    )
    decision = parser.parse_triage(text)
    assert decision.emergency is True
    assert decision.severity == "CRITICAL"
    assert decision.priority == 1
    assert decision.suggested_drone_kit == ["AED", "oxygen"]


def test_parse_triage_defaults():
    decision = parser.parse_triage('{"severity": "high"}')
    assert decision.emergency is False
    assert decision.category == "unknown"
    assert decision.severity == "HIGH"
    assert decision.priority == 2
    assert decision.suggested_drone_kit == []
    assert decision.recommended_action == ""


def test_parse_triage_infinite_priority_uses_severity():
    decision = parser.parse_triage('{"severity": "HIGH", "priority": Infinity}')
    assert decision.priority == 2

    decision = parser.parse_triage('{"severity": "LOW", "priority": 1e999}')
    assert decision.priority == 4


def test_parse_triage_echoed_template_severity_is_medium():
    decision = parser.parse_triage('{"emergency": true, "severity": "LOW | MEDIUM | HIGH | CRITICAL"}')
    assert decision.severity == "MEDIUM"
    assert decision.priority == 3


def test_parse_triage_without_json_fails():
    with pytest.raises(ResponseParseError):
        parser.parse_triage("No JSON here")


def test_parse_triage_rejects_unterminated_json():
    with pytest.raises(ResponseParseError):
        parser.parse_triage('{"a": 1')


@pytest.mark.parametrize("raw, expected", [("critical", "CRITICAL"), ("Severity: low", "LOW"), (None, "MEDIUM"), ("", "MEDIUM")])
def test_normalize_severity(raw, expected):
    assert normalize_severity(raw) == expected
