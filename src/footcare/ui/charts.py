from __future__ import annotations

from typing import List

import altair as alt
import pandas as pd
import streamlit as st

from src.footcare.config.ranges import SEVERITY_LEVELS
from src.footcare.models.app_types import UpdateHistoryEntry
from src.footcare.scoring.severity import severity_info


def history_frame(history: List[UpdateHistoryEntry]) -> pd.DataFrame:
    rows = [
        {
            "Time": entry.timestamp,
            "Score": entry.score,
            "Patient": entry.patient_id or "?",
            "Tier": severity_info(entry.score).text,
        }
        for entry in history
        if entry.score is not None
    ]
    df = pd.DataFrame(rows, columns=["Time", "Score", "Patient", "Tier"])
    if not df.empty:
        df["Time"] = pd.to_datetime(df["Time"])
        df = df.sort_values("Time")
    return df


def render_score_history(history: List[UpdateHistoryEntry]) -> None:
    df = history_frame(history)
    if df.empty:
        st.caption("No scored readings yet.")
        return

    tiers = [level.text for level in SEVERITY_LEVELS]
    colors = [level.color for level in SEVERITY_LEVELS]

    chart = (
        alt.Chart(df)
        .mark_circle(size=90)
        .encode(
            x=alt.X("Time:T", axis=alt.Axis(format="%H:%M:%S", title=None)),
            y=alt.Y("Score:Q", title="Severity (%)", scale=alt.Scale(domain=[0, 100])),
            color=alt.Color("Tier:N", scale=alt.Scale(domain=tiers, range=colors), legend=None),
            tooltip=[
                alt.Tooltip("Time:T", title="Time", format="%H:%M:%S"),
                alt.Tooltip("Patient:N"),
                alt.Tooltip("Score:Q"),
                alt.Tooltip("Tier:N"),
            ],
        )
        .properties(height=160)
    )
    line = alt.Chart(df).mark_line(strokeDash=[4, 3], color="#94a3b8").encode(x="Time:T", y="Score:Q")
    st.altair_chart(line + chart, use_container_width=True)
