from __future__ import annotations

import html
from typing import Callable, List, Optional

import streamlit as st

from src.footcare.alerts.alerts import attention_banner
from src.footcare.models.app_types import (
    DashboardState,
    PatientInfo,
    SelectionState,
    SensorReading,
    SeverityResult,
    UpdateHistoryEntry,
)
from src.footcare.ui.helpers import initials, or_na, safe_to_fixed


def error_banner(message: Optional[str]) -> None:
    if message:
        st.error(message, icon="⚠️")


def hero(refreshing: bool, on_refresh: Callable[[], bool]) -> None:
    left, right = st.columns([4, 1])
    with left:
        st.markdown(
            """
            <div class="fc-hero">
              <div style="font-size:44px">❤</div>
              <div>
                <h1>Patient Monitoring Dashboard</h1>
                <p>Real-time Foot Health Tracking</p>
              </div>
            </div>
            """,
            unsafe_allow_html=True,
        )
    with right:
        st.markdown("<div style='margin-top:28px'></div>", unsafe_allow_html=True)
        label = "Refreshing…" if refreshing else "Refresh"
        if st.button(label, disabled=refreshing, use_container_width=True):
            on_refresh()


def patient_info(info: Optional[PatientInfo], selection: Optional[SelectionState]) -> None:
    st.markdown("#### 🩺 Patient Information")
    if info is None:
        st.caption("Loading patient information...")
        return

    # Names come from the store and go into raw HTML.
    avatar = html.escape(initials(info.name))
    st.markdown(
        f"<span class='fc-avatar'>{avatar}</span>**{html.escape(or_na(info.name))}**",
        unsafe_allow_html=True,
    )
    st.markdown(
        f"""
        - **Age:** {or_na(info.age)}
        - **Gender:** {or_na(info.gender)}
        - **Condition:** {or_na(info.condition)}
        - **Last Checkup:** {or_na(info.last_checkup)}
        """
    )
    if selection is not None:
        st.markdown(f"**Patient ID:** {selection.patient_id}")


def patient_picker(selection: Optional[SelectionState], on_pick: Callable[[str], None]) -> None:
    """Sibling picker; only shown in sticky selection mode."""
    if selection is None or not selection.siblings:
        return
    siblings = list(selection.siblings)
    picked = st.selectbox(
        "Follow patient",
        siblings,
        index=siblings.index(selection.patient_id),
        key="patient_picker",
    )
    if picked != selection.patient_id:
        on_pick(picked)


def update_history(history: List[UpdateHistoryEntry]) -> None:
    st.markdown("#### 🕒 Update History")
    if not history:
        st.caption("No updates yet")
        return
    for entry in history:
        st.markdown(f"<div class='fc-hist'>🕒 {entry.label()}</div>", unsafe_allow_html=True)


def foot_health(reading: Optional[SensorReading], severity: Optional[SeverityResult]) -> None:
    st.markdown("#### 🌡️ Foot Health Status")
    if reading is None or severity is None:
        st.caption("Waiting for sensor data...")
        return

    level = severity.level
    attention_banner(severity)

    c1, c2 = st.columns(2)
    with c1:
        st.markdown(f"📏 Foot Pressure: **{safe_to_fixed(reading.foot_pressure)} psi**")
    with c2:
        st.markdown(f"🌡️ Foot Temperature: **{safe_to_fixed(reading.foot_temp)} °C**")

    st.markdown("**Severity Level:**")
    st.markdown(
        f"""
        <div class="fc-bar-wrap">
          <div class="fc-bar" style="width:{severity.score}%; background:{level.color}">{severity.score}%</div>
        </div>
        """,
        unsafe_allow_html=True,
    )
    st.caption(level.text)


def dashboard(state: DashboardState, on_refresh: Callable[[], bool], refreshing: bool) -> None:
    error_banner(state.error)
    hero(refreshing, on_refresh)
    left, right = st.columns([2, 1])
    with left:
        with st.container(border=True):
            patient_info(state.info, state.selection)
    with right:
        with st.container(border=True):
            update_history(state.history)
    with st.container(border=True):
        foot_health(state.reading, state.severity)
