"""Text triage panel."""
from __future__ import annotations

import asyncio

import httpx
import streamlit as st

from ..utils import api_client
from ..utils.state import DashboardState
from ..utils.styling import badge


def render_triage_panel(state: DashboardState) -> None:
    panel = state.triage
    st.subheader("Emergency triage")
    message = st.text_area("Emergency report", "A person collapsed and is not breathing")
    if st.button("Triage", disabled=not message.strip() or panel.loading):
        panel.start()
    if panel.loading:
        with st.spinner("Classifying report..."):
            try:
                decision = asyncio.run(api_client.triage(message))
            except (api_client.AgentError, httpx.HTTPError) as exc:
                panel.fail(str(exc))
            else:
                panel.succeed(decision)
                state.record("Triage", decision.get("severity", ""), decision.get("category", ""))

    if panel.error:
        st.error(panel.error)
    if not panel.result:
        return
    decision = panel.result
    st.markdown(badge(decision.get("severity"), "severity"), unsafe_allow_html=True)
    st.markdown(f"**Emergency:** {'yes' if decision.get('emergency') else 'no'}")
    st.markdown(f"**Category:** {decision.get('category', 'unknown')}")
    st.markdown(f"**Priority:** {decision.get('priority')}")
    st.markdown(f"**Recommended action:** {decision.get('recommended_action') or '-'}")
    kit = decision.get("suggested_drone_kit", [])
    if kit:
        st.write("Drone kit:")
        st.write("\n".join(f"- {item}" for item in kit))
