import httpx
import pytest

from pranair.frontend.utils import api_client, state
from pranair.frontend.utils.styling import UNKNOWN_COLOR, badge, urgency_color


class FakeSession(dict):
    """Mimics Streamlit's attribute-style session state."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as exc:
            raise AttributeError(name) from exc

    def __setattr__(self, name, value):
        self[name] = value


def test_urgency_color_accepts_both_casings():
    assert urgency_color("Critical") == urgency_color("CRITICAL")
    assert urgency_color("low") != urgency_color("High")
    assert urgency_color(None) == UNKNOWN_COLOR
    assert "Medium Urgency" in badge("Medium", "Urgency")


def test_panel_tri_state():
    panel = state.PanelState()
    panel.start()
    assert panel.loading and panel.error is None and panel.result is None
    panel.fail("Vision failed")
    assert not panel.loading and panel.error == "Vision failed"
    panel.start()
    panel.succeed({"urgencyLevel": "Low"})
    assert panel.result == {"urgencyLevel": "Low"} and panel.error is None
    assert not panel.loading


def test_get_state_is_stable_per_session():
    session = FakeSession()
    first = state.get_state(session)
    first.record("Triage", "HIGH", "fire")
    assert state.get_state(session) is first
    assert first.history[0]["label"] == "HIGH"


def test_agent_error_carries_envelope():
    response = httpx.Response(503, json={"error": "Provider warming up", "message": "Try again"})
    with pytest.raises(api_client.AgentError) as excinfo:
        api_client._unwrap(response)
    assert excinfo.value.status_code == 503
    assert str(excinfo.value) == "Provider warming up: Try again"
