"""Severity colouring shared by the dashboard panels."""
from __future__ import annotations

URGENCY_COLORS = {
    "critical": "#ef4444",
    "high": "#f97316",
    "medium": "#eab308",
    "low": "#22c55e",
}
UNKNOWN_COLOR = "#6b7280"


def urgency_color(level: str | None) -> str:
    """Badge colour for an urgency or severity label, in either casing."""

    return URGENCY_COLORS.get((level or "").strip().lower(), UNKNOWN_COLOR)


def badge(level: str | None, suffix: str = "") -> str:
    text = f"{level or 'Unknown'} {suffix}".strip()
    return (
        f"<span style='background:{urgency_color(level)};color:white;"
        f"padding:0.2rem 0.6rem;border-radius:999px;font-weight:600'>{text}</span>"
    )
