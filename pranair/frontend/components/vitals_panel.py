"""Agent 2 panel: submit vitals and show the generated report."""
from __future__ import annotations

import asyncio
import json

import httpx
import streamlit as st

from ..utils import api_client
from ..utils.state import DashboardState

SAMPLE_VITALS = {
    "heartRate": "110 bpm",
    "bloodPressure": "160/95 mmHg",
    "spO2": "92 %",
    "temperature": "38.2 °C",
    "respiratoryRate": "26 /min",
}


def _load(label: str, text: str):
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        st.warning(f"{label} is not valid JSON; sending it as text.")
        return text


def render_vitals_panel(state: DashboardState) -> None:
    panel = state.vitals
    st.subheader("Vitals analysis")
    with st.form("vitals_form"):
        demographics = st.text_area("Demographics (JSON)", '{"age": 58, "sex": "male"}')
        vitals = st.text_area("Real-time vitals (JSON)", json.dumps(SAMPLE_VITALS, indent=2, ensure_ascii=False))
        history = st.text_area("Medical history (JSON or text)", '["hypertension"]')
        submitted = st.form_submit_button("Generate report", disabled=panel.loading)

    if submitted:
        panel.start()
    if panel.loading:
        payload = {
            "demographics": _load("Demographics", demographics),
            "vitals": _load("Vitals", vitals),
            "history": _load("History", history),
        }
        with st.spinner("Consulting clinical assistant..."):
            try:
                response = asyncio.run(api_client.analyze_vitals(payload))
            except (api_client.AgentError, httpx.HTTPError) as exc:
                panel.fail(str(exc))
            else:
                panel.succeed(response)
                state.record("Agent 2", "report", response.get("timestamp", ""))

    if panel.error:
        st.error(panel.error)
    if panel.result:
        st.markdown(panel.result.get("analysis", ""))
        st.caption(f"Generated at {panel.result.get('timestamp', '')}")
        st.info("Decision support only. Clinical judgement remains with the doctor.")
