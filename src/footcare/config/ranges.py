from __future__ import annotations

from typing import List, Tuple

from src.footcare.models.app_types import SeverityLevel


# (upper bound exclusive, contribution); anything at or above the last bound scores PRESSURE_MAX
PRESSURE_STEPS: List[Tuple[float, int]] = [
    (110, 25),
    (120, 50),
    (130, 75),
]
PRESSURE_MAX: int = 100

# (low, high, contribution) checked outermost first; outside [low, high] scores the contribution
TEMP_BANDS: List[Tuple[float, float, int]] = [
    (26, 34, 25),
    (27, 33, 15),
    (28, 32, 10),
]

SCORE_CAP: int = 100
WARNING_THRESHOLD: int = 50

SEVERITY_LEVELS: List[SeverityLevel] = [
    SeverityLevel(20, "#22c55e", "Low Risk", "val-ok"),
    SeverityLevel(50, "#eab308", "Moderate Risk", "val-mod"),
    SeverityLevel(80, "#f97316", "High Risk", "val-high"),
    SeverityLevel(100, "#dc2626", "Critical Risk", "val-sev"),
]
