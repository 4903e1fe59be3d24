import math
from datetime import datetime, timedelta

import pytest

from src.footcare.models.app_types import PatientInfo, UpdateHistoryEntry
from src.footcare.ui import render
from src.footcare.ui.charts import history_frame
from src.footcare.ui.helpers import initials, or_na, safe_to_fixed


@pytest.mark.parametrize("value, expected", [
    (115, "115.0"), (29.96, "30.0"), (0, "0.0"),
    (None, "N/A"), ("120", "N/A"), (True, "N/A"), (math.nan, "N/A"),
])
def test_safe_to_fixed(value, expected):
    assert safe_to_fixed(value) == expected


@pytest.mark.parametrize("value, expected", [("Ana", "Ana"), (64, "64"), (None, "N/A"), ("", "N/A"), (0, "N/A")])
def test_or_na(value, expected):
    assert or_na(value) == expected


@pytest.mark.parametrize("name, expected", [("Amina Yusuf", "AY"), ("mei", "M"), ("", "?"), (None, "?")])
def test_initials(name, expected):
    assert initials(name) == expected


def test_history_frame_sorted_oldest_first_with_tiers():
    t0 = datetime(2026, 10, 17, 8, 0, 0)
    history = [
        UpdateHistoryEntry(t0 + timedelta(seconds=10), "p2", 85),
        UpdateHistoryEntry(t0, "p1", 25),
        UpdateHistoryEntry(t0 + timedelta(seconds=5), None, None),
    ]
    df = history_frame(history)
    assert list(df["Score"]) == [25, 85]
    assert list(df["Tier"]) == ["Moderate Risk", "Critical Risk"]
    assert list(df["Patient"]) == ["p1", "p2"]


def test_history_frame_empty():
    assert history_frame([]).empty


class FakeSt:
    def __init__(self):
        self.calls = []

    def markdown(self, body, unsafe_allow_html=False):
        self.calls.append((body, unsafe_allow_html))

    def caption(self, text):
        self.calls.append((text, False))


def test_patient_name_is_escaped_in_html(monkeypatch):
    fake = FakeSt()
    monkeypatch.setattr(render, "st", fake)
    info = PatientInfo(name="<img src=x onerror=alert(1)>", age=60, gender="F", condition=None, last_checkup=None)

    render.patient_info(info, None)

    raw = [body for body, unsafe in fake.calls if unsafe]
    assert len(raw) == 1
    assert "<img" not in raw[0]
    assert "&lt;img src=x onerror=alert(1)&gt;" in raw[0]

