from __future__ import annotations

import logging
from typing import NamedTuple, Optional

import streamlit as st

from src.footcare.config.settings import Settings
from src.footcare.errors import StoreConnectionError
from src.footcare.sim.engine import FootSensorSimulator
from src.footcare.store.memory import MemoryStore
from src.footcare.telemetry.scheduler import RefreshScheduler
from src.footcare.telemetry.subscription import TelemetrySubscription

logger = logging.getLogger(__name__)


class Monitor(NamedTuple):
    subscription: TelemetrySubscription
    scheduler: RefreshScheduler
    sim: Optional[FootSensorSimulator]


@st.cache_resource(show_spinner=False)
def shared_monitor(_settings: Settings) -> Monitor:
    """One store link, subscription and scheduler for the whole server process.

    Raises StoreConnectionError (not cached) when Firebase can't be reached.
    """
    sim = None
    if _settings.use_firebase:
        # firebase-admin is only loaded when a database URL is configured.
        from src.footcare.store.firebase import connect

        store = connect(_settings.store)
    else:
        logger.info("no FIREBASE_DATABASE_URL set, using simulated store")
        store = MemoryStore()
        sim = FootSensorSimulator(store, _settings.root_path)

    subscription = TelemetrySubscription(
        store,
        root_path=_settings.root_path,
        selection_mode=_settings.selection_mode,
    )
    scheduler = RefreshScheduler(
        subscription,
        interval=_settings.refresh_sec,
        read_timeout=_settings.read_timeout_sec,
    )
    logger.info("monitor started for %s", _settings.root_path)
    return Monitor(subscription, scheduler, sim)


def ensure_init(settings: Settings) -> None:
    """Attach the shared monitor to this browser session.

    Sets `st.session_state.monitor`, `st.session_state.scheduler`,
    `st.session_state.sim` (local mode only) and
    `st.session_state.connect_error` when the store can't be reached.
    """
    if st.session_state.get("monitor") is not None:
        return

    st.session_state.monitor = None
    st.session_state.scheduler = None
    st.session_state.sim = None
    st.session_state.connect_error = None

    try:
        bundle = shared_monitor(settings)
    except StoreConnectionError as exc:
        st.session_state.connect_error = str(exc)
        return

    st.session_state.monitor = bundle.subscription
    st.session_state.scheduler = bundle.scheduler
    st.session_state.sim = bundle.sim


def teardown() -> None:
    """Stop the shared monitor; the next new session builds a fresh one."""
    scheduler = st.session_state.get("scheduler")
    monitor = st.session_state.get("monitor")
    if scheduler is not None:
        scheduler.close()
    if monitor is not None:
        monitor.close()
    shared_monitor.clear()
