# Foot-health severity (0–100) from two sensor values:
#   footPressure (psi) -> 25 / 50 / 75 / 100 step
#   footTemp (°C)      -> 0 / 10 / 15 / 25 by distance from the 28–32 band
# Invalid readings count as 0 so a partial reading still yields a score.
from __future__ import annotations

import math
from typing import Any, Optional

from src.footcare.config.ranges import (
    PRESSURE_MAX,
    PRESSURE_STEPS,
    SCORE_CAP,
    SEVERITY_LEVELS,
    TEMP_BANDS,
)
from src.footcare.models.app_types import SensorReading, SeverityLevel, SeverityResult


def _as_number(x: Any) -> float:
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        return 0.0
    if math.isnan(x):
        return 0.0
    return float(x)


def score_pressure(pressure: Any) -> int:
    p = _as_number(pressure)
    for upper, points in PRESSURE_STEPS:
        if p < upper:
            return points
    return PRESSURE_MAX


def score_temp(temp: Any) -> int:
    t = _as_number(temp)
    for low, high, points in TEMP_BANDS:
        if t < low or t > high:
            return points
    return 0


def calculate_severity(pressure: Any, temp: Any) -> int:
    return min(score_pressure(pressure) + score_temp(temp), SCORE_CAP)


def severity_info(score: int) -> SeverityLevel:
    for level in SEVERITY_LEVELS:
        if score <= level.max:
            return level
    return SEVERITY_LEVELS[-1]


def score_reading(reading: Optional[SensorReading]) -> SeverityResult:
    """Score a reading; no reading scores 0 ("Low Risk")."""
    if reading is None:
        return SeverityResult(0, severity_info(0))
    score = calculate_severity(reading.foot_pressure, reading.foot_temp)
    return SeverityResult(score, severity_info(score))
