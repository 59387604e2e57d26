"""Prompt builders for the three agents."""
from __future__ import annotations

import json
from typing import Any

from ..schemas.vitals import VitalsRequest

DISTRESS_PROMPT = (
    "You are Agent 1 in the PranAIR emergency response system.\n"
    "Inspect the image for people who may need urgent help.\n"
    "Reply ONLY with valid JSON, no text before or after it:\n"
    "{\n"
    '  "human_visible": true,\n'
    '  "number_of_people": 0,\n'
    '  "body_posture": "standing | sitting | lying | collapsed | unknown",\n'
    '  "movement_observed": false,\n'
    '  "visible_blood": false,\n'
    '  "signs_of_distress": [],\n'
    '  "confidence": 0.0,\n'
    '  "summary": ""\n'
    "}\n"
    "Describe the most at-risk person when several are visible. "
    "Use \"unknown\" when the posture cannot be judged."
)

VITALS_SYSTEM_INSTRUCTION = """
You are Agent 2 in the PranAIR emergency response system.

ROLE:
You are a clinical decision support assistant helping doctors during
emergency admissions by analyzing real-time patient vitals collected from
wearable and bedside devices.

Your ONLY task is to:
1. Display all critical patient vitals in a clear, emoji-enhanced, doctor-friendly dashboard format
2. Analyze the vitals medically
3. Provide structured, concise, and clinically actionable insights
4. Help doctors reach conclusions faster, NOT replace doctors

OUTPUT REQUIREMENTS (MANDATORY):
- Return data in structured sections using emojis.
- Be concise, factual, and clinically correct.
- Highlight abnormalities clearly.
- Do not use vague language.
- Do not speculate beyond medical reasoning.
""".strip()

TRIAGE_TEMPLATE = """You are PranAIR, an emergency response AI.

Analyze this emergency report:
"{message}"

Decide:
1. Is it an emergency?
2. What category?
3. How severe?
4. What should PranAIR do?

Reply ONLY in valid JSON:
{{
  "emergency": true,
  "category": "",
  "severity": "LOW | MEDIUM | HIGH | CRITICAL",
  "priority": 1,
  "suggested_drone_kit": [],
  "recommended_action": ""
}}
"""


def _section(value: Any, fallback: str) -> str:
    return json.dumps(value if value not in (None, "", {}, []) else fallback, indent=2, ensure_ascii=False)


def build_vitals_prompt(data: VitalsRequest) -> str:
    """Compose the user prompt carrying demographics, vitals and history."""

    return (
        "Analyze the following patient data and generate the medical dashboard.\n\n"
        f"DEMOGRAPHICS:\n{_section(data.demographics, 'Unknown')}\n\n"
        f"REAL-TIME VITALS:\n{_section(data.vitals, 'No vitals provided')}\n\n"
        f"MEDICAL HISTORY:\n{_section(data.history, 'None provided')}\n"
    )


def build_triage_prompt(message: str) -> str:
    # Quotes would close the report literal early.
    cleaned = message.strip().replace('"', "'")
    return TRIAGE_TEMPLATE.format(message=cleaned)
