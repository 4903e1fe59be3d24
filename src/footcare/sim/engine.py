from __future__ import annotations

import time
from typing import Dict, Optional

import numpy as np

from src.footcare.models.app_types import ROOT_PATH
from src.footcare.store.memory import MemoryStore

# Baselines the readings drift around.
BASE_PRESSURE = 105.0    # psi
BASE_TEMP = 30.0         # °C

# Pulls readings back toward baseline each step (simple mean reversion).
MEAN_REVERT_STRENGTH = 0.05
PRESSURE_NOISE = 2.0
TEMP_NOISE = 0.3

# Probability per step that a patient starts a shock episode.
EXTREME_EVENT_PROB_PER_STEP = 0.02
EXTREME_EVENT_DURATION_SEC_RANGE = (20, 60)
EXTREME_TARGETS = {
    "footPressure": (125.0, 145.0),
    "footTemp": (34.5, 37.0),
}

DEMO_GROUPS: Dict[str, Dict[str, Dict[str, object]]] = {
    "ward-a": {
        "p01": {"name": "Amina Yusuf", "age": 64, "gender": "Female",
                "condition": "Type 2 diabetes", "lastCheckup": "2026-09-30"},
        "p02": {"name": "Daniel Okafor", "age": 71, "gender": "Male",
                "condition": "Peripheral neuropathy", "lastCheckup": "2026-10-02"},
        "p03": {"name": "Mei Lin", "age": 58, "gender": "Female",
                "condition": "Type 1 diabetes", "lastCheckup": "2026-09-21"},
    },
    "ward-b": {
        "p04": {"name": "Jorge Ruiz", "age": 66, "gender": "Male",
                "condition": "Foot ulcer (healing)", "lastCheckup": "2026-10-09"},
        "p05": {"name": "Hannah Berg", "age": 49, "gender": "Female",
                "condition": "Charcot foot", "lastCheckup": "2026-10-11"},
    },
    # Groups without patients exist in real data too and must be skipped.
    "ward-c": {},
}


class FootSensorSimulator:
    """Writes drifting foot-health readings into a MemoryStore."""

    def __init__(self, store: MemoryStore, root_path: str = ROOT_PATH, seed: Optional[int] = None) -> None:
        self.store = store
        self.root_path = root_path
        self._rng = np.random.default_rng(seed)
        self._shock_until: Dict[str, float] = {}
        self._values: Dict[str, Dict[str, float]] = {}
        self._seed_store()

    def _seed_store(self) -> None:
        tree: Dict[str, Dict] = {}
        for gid, patients in DEMO_GROUPS.items():
            group: Dict[str, Dict] = {"patients": {}}
            for pid, info in patients.items():
                values = {
                    "footPressure": float(BASE_PRESSURE + self._rng.normal(0, 4)),
                    "footTemp": float(BASE_TEMP + self._rng.normal(0, 0.8)),
                }
                self._values[f"{gid}/{pid}"] = values
                group["patients"][pid] = {
                    "info": dict(info),
                    "sensorData": {"footHealth": _rounded(values)},
                }
            tree[gid] = group
        self._tree = tree
        self.store.set(self.root_path, tree)

    def step(self, now: Optional[float] = None) -> None:
        now = time.time() if now is None else now
        for key, v in self._values.items():
            gid, pid = key.split("/")
            if now < self._shock_until.get(key, 0.0):
                lo, hi = EXTREME_TARGETS["footPressure"]
                v["footPressure"] = float(self._rng.uniform(lo, hi))
                lo, hi = EXTREME_TARGETS["footTemp"]
                v["footTemp"] = float(self._rng.uniform(lo, hi))
            else:
                if self._rng.random() < EXTREME_EVENT_PROB_PER_STEP:
                    lo, hi = EXTREME_EVENT_DURATION_SEC_RANGE
                    self._shock_until[key] = now + float(self._rng.uniform(lo, hi))
                v["footPressure"] += (
                    MEAN_REVERT_STRENGTH * (BASE_PRESSURE - v["footPressure"])
                    + self._rng.normal(0, PRESSURE_NOISE)
                )
                v["footTemp"] += (
                    MEAN_REVERT_STRENGTH * (BASE_TEMP - v["footTemp"])
                    + self._rng.normal(0, TEMP_NOISE)
                )
            self._tree[gid]["patients"][pid]["sensorData"]["footHealth"] = _rounded(v)
        # One write per step so root subscribers see one notification.
        self.store.set(self.root_path, self._tree)


def _rounded(values: Dict[str, float]) -> Dict[str, float]:
    return {k: round(x, 1) for k, x in values.items()}
