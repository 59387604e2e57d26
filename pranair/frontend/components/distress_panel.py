"""Agent 1 panel: upload an image and show the distress assessment."""
from __future__ import annotations

import asyncio

import httpx
import streamlit as st

from ..utils import api_client
from ..utils.state import DashboardState
from ..utils.styling import badge


def render_distress_panel(state: DashboardState) -> None:
    panel = state.distress
    st.subheader("Human distress detection")
    upload = st.file_uploader("Scene image", type=["jpg", "jpeg", "png", "webp"])
    if upload is not None:
        st.image(upload, use_container_width=True)

    if st.button("Analyze image", disabled=upload is None or panel.loading):
        panel.start()
    if panel.loading and upload is None:
        panel.fail("Select an image to analyze")
    if panel.loading:
        with st.spinner("Analyzing scene..."):
            try:
                response = asyncio.run(api_client.analyze_image(upload.name, upload.getvalue(), upload.type))
            except (api_client.AgentError, httpx.HTTPError) as exc:
                panel.fail(str(exc))
            else:
                panel.succeed(response["analysis"])
                analysis = response["analysis"]
                state.record("Agent 1", analysis.get("urgencyLevel", ""), analysis.get("summary", ""))

    if panel.error:
        st.error(panel.error)
    if not panel.result:
        return
    analysis = panel.result
    st.markdown(badge(analysis.get("urgencyLevel"), "Urgency"), unsafe_allow_html=True)
    col1, col2, col3 = st.columns(3)
    col1.metric("People", analysis.get("numberOfPeople", 0))
    col2.metric("Posture", analysis.get("bodyPosture", "unknown"))
    col3.metric("Confidence", f"{analysis.get('confidence', 0.0):.0%}")
    st.write(analysis.get("summary", ""))
    signs = analysis.get("signsOfDistress", [])
    if signs:
        st.write("\n".join(f"- {sign}" for sign in signs))
    st.caption(f"Life threat: {analysis.get('lifeThreat', 'Low')}")
