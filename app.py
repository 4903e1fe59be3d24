"""Foot-health monitor Streamlit app.

This file is the Streamlit *entrypoint*.

What this app does
------------------
- Connects to the Firebase Realtime Database named by FIREBASE_DATABASE_URL
  (or, without one, to a simulated in-memory store with a few demo wards).
- Picks a patient group and a patient, follows that patient's foot-health
  reading, and scores it (foot pressure + foot temperature -> 0–100 %).
- Refreshes every FOOTCARE_REFRESH_SEC seconds; the page reruns once a second
  and each rerun polls the shared refresh scheduler.
- Renders patient info, the last five updates, the reading with its severity
  bar and a warning banner when the score goes above 50 %.

How it runs
-----------
    `python -m streamlit run app.py`
"""

import os
import sys

import streamlit as st
from streamlit_autorefresh import st_autorefresh

# Ensure the project root (folder containing `src/`) is on sys.path.
PROJECT_ROOT = os.path.dirname(__file__)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from src.footcare.config.settings import load_settings
from src.footcare.logging_setup import setup_logging
from src.footcare.state.init import ensure_init, teardown
from src.footcare.ui import render as ui_render
from src.footcare.ui import styles as ui_styles
from src.footcare.ui.charts import render_score_history

# Page rerun interval; each rerun polls the refresh scheduler.
RERUN_MS = 1000


def main() -> None:
    st.set_page_config(page_title="Foot Health Monitor", layout="wide")
    ui_styles.inject()

    settings = load_settings()
    setup_logging(settings.log_level)
    ensure_init(settings)

    if st.session_state.connect_error:
        st.error(st.session_state.connect_error)
        st.info("Live data unavailable. Check the Firebase settings in your .env and reload.")
        return

    monitor = st.session_state.monitor
    scheduler = st.session_state.scheduler

    with st.sidebar:
        st.markdown("## Monitor")
        st.caption(f"Store: {'Firebase' if settings.use_firebase else 'simulated'}")
        st.caption(f"Selection: {monitor.selection_mode}")
        if monitor.selection_mode == "sticky":
            ui_render.patient_picker(monitor.snapshot().selection, monitor.choose_patient)
        if st.button("Stop monitoring", use_container_width=True, disabled=monitor.closed):
            teardown()

    # Shared by every session; the scheduler's interval gates how often this fires.
    fired = scheduler.poll()
    if fired and st.session_state.sim is not None and not monitor.closed:
        st.session_state.sim.step()

    state = monitor.snapshot()
    ui_render.dashboard(state, scheduler.trigger, scheduler.refreshing)

    with st.container(border=True):
        st.markdown("**Recent scores**")
        render_score_history(state.history)

    if not monitor.closed:
        st_autorefresh(interval=RERUN_MS, key="rerun")


if __name__ == "__main__":
    main()
