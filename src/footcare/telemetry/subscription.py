"""Live link between the patient store and the dashboard state.

One subscription watches the root collection. Every root notification picks
a patient and (re)opens a nested subscription on that patient's record. All
state changes happen under one lock; callbacks from a subscription that has
since been replaced, or that arrive after `close()`, are dropped.
"""
from __future__ import annotations

import logging
import random
import threading
from datetime import datetime
from typing import Any, Callable, List, Optional

from src.footcare.errors import NoPatientData, NoPatientGroups, StoreError, TelemetryError
from src.footcare.models.app_types import (
    ROOT_PATH,
    SELECTION_MODES,
    DashboardState,
    PatientInfo,
    SelectionState,
    SensorReading,
    SeverityResult,
    UpdateHistoryEntry,
)
from src.footcare.scoring.severity import score_reading
from src.footcare.selection.selector import as_mapping, patient_path, select_patient
from src.footcare.state.history import UpdateHistoryLog
from src.footcare.store.base import Store

logger = logging.getLogger(__name__)

Listener = Callable[[DashboardState], None]


class TelemetrySubscription:
    def __init__(
        self,
        store: Store,
        root_path: str = ROOT_PATH,
        selection_mode: str = "random",
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if selection_mode not in SELECTION_MODES:
            raise ValueError(f"unknown selection mode {selection_mode!r}")
        self._store = store
        self._root_path = root_path
        self.selection_mode = selection_mode
        self._rng = rng or random.Random()
        self._clock = clock
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

        self._root_token: Any = None
        self._nested_token: Any = None
        self._root_gen = 0
        self._nested_gen = 0
        self._closed = False
        self._pending: Optional[Callable[[], None]] = None

        self._selection: Optional[SelectionState] = None
        self._info: Optional[PatientInfo] = None
        self._reading: Optional[SensorReading] = None
        self._severity: SeverityResult = score_reading(None)
        self._error: Optional[str] = None
        self.history = UpdateHistoryLog()

    # ------------------------------------------------------------------
    # Observer contract
    # ------------------------------------------------------------------
    def add_listener(self, fn: Listener) -> None:
        with self._lock:
            self._listeners.append(fn)

    def remove_listener(self, fn: Listener) -> None:
        with self._lock:
            if fn in self._listeners:
                self._listeners.remove(fn)

    def snapshot(self) -> DashboardState:
        with self._lock:
            return DashboardState(
                info=self._info,
                reading=self._reading,
                severity=self._severity,
                history=self.history.entries(),
                error=self._error,
                selection=self._selection,
                refreshing=self._pending is not None,
                closed=self._closed,
            )

    def _emit(self) -> None:
        with self._lock:
            state = self.snapshot()
            listeners = list(self._listeners)
        for fn in listeners:
            try:
                fn(state)
            except Exception:
                logger.exception("dashboard listener failed")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> None:
        self.refresh()

    def refresh(self, on_complete: Optional[Callable[[], None]] = None) -> None:
        """Re-subscribe the root collection.

        `on_complete` runs once, when this refresh ends in a patient
        notification, an error, or a stop condition.
        """
        with self._lock:
            closed = self._closed
            if not closed:
                stale = self._detach()
                self._root_gen += 1
                gen = self._root_gen
                self._pending = on_complete or _noop
        if closed:
            logger.debug("refresh ignored: subscription closed")
            if on_complete is not None:
                on_complete()
            return
        self._release(stale)

        logger.debug("subscribing %s", self._root_path)
        token = self._store.subscribe(
            self._root_path,
            lambda data: self._on_root(gen, data),
            lambda message: self._on_root_error(gen, message),
        )
        with self._lock:
            if gen == self._root_gen and not self._closed:
                self._root_token, token = token, None
        if token is not None:
            self._store.unsubscribe(token)

    def choose_patient(self, patient_id: str) -> None:
        """Pin `patient_id` (a sibling of the current patient) and follow it."""
        with self._lock:
            current = self._selection
            if current is None or patient_id not in current.siblings:
                raise ValueError(f"patient {patient_id!r} is not in the current group")
            self.selection_mode = "sticky"
            selection = SelectionState(current.group_id, patient_id, current.siblings)
        logger.info("patient pinned: %s/%s", selection.group_id, patient_id)
        self._follow(selection)

    def expire(self, reason: str) -> None:
        """Give up on the in-flight refresh and surface `reason` as a store error."""
        with self._lock:
            if self._closed:
                return
            self._pending = None
            self._error = str(StoreError(reason))
        logger.warning("refresh expired: %s", reason)
        self._emit()

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            stale = self._detach()
            self._pending = None
            self._listeners.clear()
        self._release(stale)
        logger.info("telemetry subscription closed")

    def _detach(self) -> List[Any]:
        # Caller holds the lock. Bumping both generations orphans in-flight callbacks.
        stale = [t for t in (self._root_token, self._nested_token) if t is not None]
        self._root_token = self._nested_token = None
        self._root_gen += 1
        self._nested_gen += 1
        return stale

    def _release(self, tokens: List[Any]) -> None:
        # Outside the lock: a store may join its listener thread here.
        for token in tokens:
            self._store.unsubscribe(token)

    # ------------------------------------------------------------------
    # Store callbacks
    # ------------------------------------------------------------------
    def _on_root(self, gen: int, data: Any) -> None:
        with self._lock:
            if self._closed or gen != self._root_gen:
                return
            failure: Optional[TelemetryError] = None
            groups = as_mapping(data)
            if not groups:
                failure = NoPatientData()
            else:
                try:
                    selection = select_patient(
                        groups, self._rng, previous=self._selection, mode=self.selection_mode
                    )
                except NoPatientGroups as exc:
                    failure = exc
            if failure is not None:
                done = self._fail(failure)
            else:
                self._selection = selection
        if failure is not None:
            self._settle(done)
            return
        logger.info("monitoring %s/%s", selection.group_id, selection.patient_id)
        self._follow(selection)

    def _on_root_error(self, gen: int, message: str) -> None:
        with self._lock:
            if self._closed or gen != self._root_gen:
                return
            done = self._fail(StoreError(message))
        self._settle(done)

    def _follow(self, selection: SelectionState) -> None:
        with self._lock:
            if self._closed:
                return
            self._selection = selection
            stale = [self._nested_token] if self._nested_token is not None else []
            self._nested_token = None
            self._nested_gen += 1
            gen = self._nested_gen
        self._release(stale)

        token = self._store.subscribe(
            patient_path(self._root_path, selection),
            lambda data: self._on_patient(gen, data),
            lambda message: self._on_patient_error(gen, message),
        )
        with self._lock:
            if gen == self._nested_gen and not self._closed:
                self._nested_token, token = token, None
        if token is not None:
            self._store.unsubscribe(token)

    def _on_patient(self, gen: int, data: Any) -> None:
        with self._lock:
            if self._closed or gen != self._nested_gen:
                return
            if not data or not isinstance(data, dict):
                # Last known info and reading stay on screen.
                done = self._fail(NoPatientData())
            else:
                self._apply(data)
                done = self._take_pending()
        self._settle(done)

    def _on_patient_error(self, gen: int, message: str) -> None:
        with self._lock:
            if self._closed or gen != self._nested_gen:
                return
            done = self._fail(StoreError(message))
        self._settle(done)

    def _apply(self, record: dict) -> None:
        self._info = PatientInfo.from_record(record.get("info"))
        sensor_data = record.get("sensorData")
        raw = sensor_data.get("footHealth") if isinstance(sensor_data, dict) else None
        self._reading = SensorReading.from_record(raw)
        self._severity = score_reading(self._reading)
        self._error = None
        if self._reading is None:
            return
        patient_id = self._selection.patient_id if self._selection else None
        logger.debug("reading for %s score=%d", patient_id, self._severity.score)
        self.history.record(UpdateHistoryEntry(self._clock(), patient_id, self._severity.score))

    def _fail(self, exc: TelemetryError) -> Callable[[], None]:
        logger.warning("%s", exc)
        self._error = str(exc)
        return self._take_pending()

    def _take_pending(self) -> Callable[[], None]:
        done, self._pending = self._pending, None
        return done or _noop

    def _settle(self, done: Callable[[], None]) -> None:
        self._emit()
        done()


def _noop() -> None:
    pass
