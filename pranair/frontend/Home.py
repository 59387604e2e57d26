"""Streamlit entrypoint for the PranAIR dashboard."""
from __future__ import annotations

import streamlit as st

from pranair.frontend.components import distress_panel, history_table, triage_panel, vitals_panel
from pranair.frontend.utils import state

st.set_page_config(page_title="PranAIR", layout="wide")
st.title("PranAIR Emergency Dashboard")
st.caption("Decision support only. The operator remains the final decision-maker.")

dashboard = state.get_state(st.session_state)

tab_distress, tab_vitals, tab_triage = st.tabs(["Agent 1 - Distress", "Agent 2 - Vitals", "Triage"])

with tab_distress:
    distress_panel.render_distress_panel(dashboard)

with tab_vitals:
    vitals_panel.render_vitals_panel(dashboard)

with tab_triage:
    triage_panel.render_triage_panel(dashboard)

st.divider()
history_table.render_history(dashboard.history)
