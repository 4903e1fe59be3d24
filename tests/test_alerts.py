import pytest

import src.footcare.alerts.alerts as m
from src.footcare.models.app_types import SeverityResult
from src.footcare.scoring.severity import severity_info


class FakeSt:
    """Records what the alerts module draws."""
    def __init__(self):
        self.markdowns = []
        self.warnings = []

    def markdown(self, body, unsafe_allow_html=False):
        self.markdowns.append(body)

    def warning(self, msg):
        self.warnings.append(msg)


@pytest.fixture
def fake_st(monkeypatch):
    fake = FakeSt()
    monkeypatch.setattr(m, "st", fake)
    return fake


def result(score):
    return SeverityResult(score, severity_info(score))


@pytest.mark.parametrize("score, expected", [(None, False), (0, False), (50, False), (51, True), (100, True)])
def test_needs_attention(score, expected):
    res = None if score is None else result(score)
    assert m.needs_attention(res) is expected


@pytest.mark.parametrize("score, text, css", [
    (65, "High Risk", "val-high"),
    (85, "Critical Risk", "val-sev"),
])
def test_banner_names_tier_above_threshold(fake_st, score, text, css):
    assert m.attention_banner(result(score)) is True
    assert len(fake_st.markdowns) == 1
    assert f"{text} - Immediate Attention Required" in fake_st.markdowns[0]
    assert css in fake_st.markdowns[0]


@pytest.mark.parametrize("score", [None, 0, 50])
def test_no_banner_at_or_below_threshold(fake_st, score):
    res = None if score is None else result(score)
    assert m.attention_banner(res) is False
    assert fake_st.markdowns == []


def test_banner_has_no_audio(fake_st):
    for _ in range(3):
        m.attention_banner(result(95))
    assert fake_st.warnings == []
    assert not any("<audio" in body for body in fake_st.markdowns)
    assert not hasattr(m, "components")
