"""Session state helpers for Streamlit."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class PanelState:
    """Loading / error / result tri-state for one agent panel.

    A panel sends its request on the run where ``loading`` is set and keeps
    its submit button disabled until the request settles.
    """

    loading: bool = False
    error: Optional[str] = None
    result: Optional[Dict[str, Any]] = None

    def start(self) -> None:
        self.loading = True
        self.error = None
        self.result = None

    def succeed(self, result: Dict[str, Any]) -> None:
        self.loading = False
        self.result = result

    def fail(self, message: str) -> None:
        self.loading = False
        self.error = message


@dataclass
class DashboardState:
    distress: PanelState = field(default_factory=PanelState)
    vitals: PanelState = field(default_factory=PanelState)
    triage: PanelState = field(default_factory=PanelState)
    history: List[Dict[str, Any]] = field(default_factory=list)

    def record(self, agent: str, label: str, summary: str) -> None:
        self.history.insert(
            0,
            {
                "time": datetime.now().strftime("%H:%M:%S"),
                "agent": agent,
                "label": label,
                "summary": summary,
            },
        )


def get_state(session_state) -> DashboardState:
    if "dashboard_state" not in session_state:
        session_state.dashboard_state = DashboardState()
    return session_state.dashboard_state
