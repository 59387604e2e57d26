"""Component that renders the session's agent history."""
from __future__ import annotations

from typing import List

import pandas as pd
import streamlit as st


def render_history(history: List[dict]) -> None:
    st.subheader("Session history")
    if not history:
        st.info("No agent results yet.")
        return
    df = pd.DataFrame(history, columns=["time", "agent", "label", "summary"])
    st.dataframe(df, use_container_width=True, hide_index=True)
