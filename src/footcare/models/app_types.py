from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Tuple

# Refresh / store defaults
REFRESH_INTERVAL_SEC: float = 5.0
READ_TIMEOUT_SEC: float = 15.0
HISTORY_MAXLEN: int = 5
ROOT_PATH: str = "adddelete"

SELECTION_MODES = ("random", "sticky")


@dataclass(frozen=True)
class SeverityLevel:
    max: int
    color: str
    text: str
    warning_class: str


@dataclass(frozen=True)
class SeverityResult:
    score: int
    level: SeverityLevel


@dataclass(frozen=True)
class PatientInfo:
    name: Optional[str] = None
    age: Any = None
    gender: Optional[str] = None
    condition: Optional[str] = None
    last_checkup: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Any) -> Optional["PatientInfo"]:
        if not isinstance(raw, dict):
            return None
        return cls(
            name=raw.get("name"),
            age=raw.get("age"),
            gender=raw.get("gender"),
            condition=raw.get("condition"),
            last_checkup=raw.get("lastCheckup"),
        )


@dataclass(frozen=True)
class SensorReading:
    foot_pressure: Any = None  # psi
    foot_temp: Any = None      # °C

    @classmethod
    def from_record(cls, raw: Any) -> Optional["SensorReading"]:
        if not isinstance(raw, dict) or not raw:
            return None
        return cls(foot_pressure=raw.get("footPressure"), foot_temp=raw.get("footTemp"))


@dataclass(frozen=True)
class UpdateHistoryEntry:
    timestamp: datetime
    patient_id: Optional[str] = None
    score: Optional[int] = None

    def label(self) -> str:
        return self.timestamp.strftime("%x %X")


@dataclass(frozen=True)
class SelectionState:
    group_id: str
    patient_id: str
    siblings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DashboardState:
    """What the view needs to draw one frame."""

    info: Optional[PatientInfo] = None
    reading: Optional[SensorReading] = None
    severity: Optional[SeverityResult] = None
    history: List[UpdateHistoryEntry] = field(default_factory=list)
    error: Optional[str] = None
    selection: Optional[SelectionState] = None
    refreshing: bool = False
    closed: bool = False
