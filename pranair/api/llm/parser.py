"""Robust parsing helpers for provider responses."""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..core.errors import ProviderWarmingUp, ResponseParseError
from ..schemas.distress import Detection, Posture, VisionObservation
from ..schemas.triage import TriageDecision
from ..services.severity import PRIORITY_BY_SEVERITY

logger = logging.getLogger(__name__)

_JSON_RE = re.compile(r"\{.*\}", re.DOTALL)
_SEVERITY_RE = re.compile(r"\b(LOW|MEDIUM|HIGH|CRITICAL)\b")

# Checked in order: the first matching group wins.
_POSTURE_PATTERNS = (
    (Posture.collapsed, re.compile(r"\b(collaps\w*|unconscious|unresponsive|fallen|fell)\b")),
    (Posture.lying, re.compile(r"\b(lying|laying|lies|prone|supine|recumbent)\b|\bon the (ground|floor)\b")),
    (Posture.sitting, re.compile(r"\b(sit|sits|sitting|seated|kneel\w*|crouch\w*|squat\w*)\b")),
    (Posture.standing, re.compile(r"\b(stand\w*|upright|walking|running)\b")),
)

_CONFIDENCE_WORDS = {"high": 0.9, "medium": 0.6, "moderate": 0.6, "low": 0.3}

_TRUE_WORDS = {"true", "yes", "y", "1", "present", "visible"}


def extract_json_block(text: str) -> str | None:
    """Return the first JSON-object-shaped substring of ``text``, if any."""

    match = _JSON_RE.search(text)
    if not match:
        return None
    candidate = match.group(0)
    try:
        json.loads(candidate)
        return candidate
    except json.JSONDecodeError:
        pass
    # Trailing prose can contain braces; fall back to the first decodable object.
    decoder = json.JSONDecoder()
    for start in (m.start() for m in re.finditer(r"\{", text)):
        try:
            _, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            continue
        return text[start:end]
    return candidate


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in _TRUE_WORDS


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [str(value)]


def normalize_posture(value: Any) -> Posture:
    if isinstance(value, Posture):
        return value
    if not value:
        return Posture.unknown
    lowered = str(value).strip().lower()
    try:
        return Posture(lowered)
    except ValueError:
        pass
    for posture, pattern in _POSTURE_PATTERNS:
        if pattern.search(lowered):
            return posture
    return Posture.unknown


def normalize_confidence(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        word = value.strip().lower().rstrip("%")
        if word in _CONFIDENCE_WORDS:
            return _CONFIDENCE_WORDS[word]
        value = word
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    if 1.0 < number <= 100.0:
        number /= 100.0
    return min(max(number, 0.0), 1.0)


def normalize_severity(value: Any) -> str:
    """Resolve a severity label; ambiguous or missing values become MEDIUM."""

    found = set(_SEVERITY_RE.findall(str(value or "").upper()))
    if len(found) == 1:
        return found.pop()
    return "MEDIUM"


class ResponseParser:
    """Locate JSON in provider text and project it onto the fixed schemas."""

    def load_object(self, text: str) -> Dict[str, Any]:
        block = extract_json_block(text or "")
        if block is None:
            raise ResponseParseError("No JSON found in provider response", raw=text or "")
        try:
            data = json.loads(block)
        except json.JSONDecodeError as exc:
            raise ResponseParseError(f"Invalid JSON in provider response ({exc.msg})", raw=text) from exc
        if not isinstance(data, dict):
            raise ResponseParseError("Provider JSON is not an object", raw=text)
        return data

    def parse_observation(self, text: str) -> VisionObservation:
        """Map a vision model's JSON answer, defaulting any missing field."""

        data = self.load_object(text)
        human_visible = _as_bool(_first(data, "human_visible", "humanVisible", "person_visible"))
        people = _as_int(_first(data, "number_of_people", "numberOfPeople", "people_count", "person_count", "people"))
        if people is None:
            people = 1 if human_visible else 0
        movement = _first(data, "movement_observed", "movementObserved", "movement", "is_moving")
        motionless = _first(data, "appears_motionless", "appearsMotionless", "motionless")
        if movement is None and motionless is not None:
            movement = not _as_bool(motionless)
        return VisionObservation(
            number_of_people=max(people, 0),
            body_posture=normalize_posture(_first(data, "body_posture", "bodyPosture", "posture")),
            movement_observed=_as_bool(movement),
            visible_blood=_as_bool(_first(data, "visible_blood", "visibleBlood", "bleeding", "blood")),
            signs_of_distress=_as_str_list(_first(data, "signs_of_distress", "signsOfDistress", "distress_signs")),
            confidence=normalize_confidence(_first(data, "confidence", "confidence_score", "score")),
            summary=str(_first(data, "summary", "description") or "").strip(),
        )

    def parse_detections(self, text: str) -> List[Detection]:
        """Parse an object-detection body, which must be a JSON array."""

        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as exc:
            raise ResponseParseError("Detection response is not JSON", raw=text or "") from exc
        if isinstance(data, dict):
            error = str(data.get("error", ""))
            if "estimated_time" in data or "loading" in error.lower():
                raise ProviderWarmingUp("Vision model warming up. Try again in 10 seconds.", raw=text)
            raise ResponseParseError(error or "Detection response is not a list", raw=text)
        if not isinstance(data, list):
            raise ResponseParseError("Detection response is not a list", raw=text)
        detections = []
        for item in data:
            try:
                detections.append(Detection.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping malformed detection %r: %s", item, exc)
        return detections

    def parse_triage(self, text: str) -> TriageDecision:
        data = self.load_object(text)
        severity = normalize_severity(data.get("severity"))
        priority = _as_int(data.get("priority"))
        if priority is None or priority < 1:
            priority = PRIORITY_BY_SEVERITY[severity]
        return TriageDecision(
            emergency=_as_bool(data.get("emergency")),
            category=str(data.get("category") or "unknown").strip() or "unknown",
            severity=severity,
            priority=priority,
            suggested_drone_kit=_as_str_list(data.get("suggested_drone_kit")),
            recommended_action=str(data.get("recommended_action") or "").strip(),
        )


parser = ResponseParser()
