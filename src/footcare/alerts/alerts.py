# Attention banner for readings above the warning threshold.

from typing import Optional

import streamlit as st

from src.footcare.config.ranges import WARNING_THRESHOLD
from src.footcare.models.app_types import SeverityResult


def needs_attention(result: Optional[SeverityResult]) -> bool:
    return result is not None and result.score > WARNING_THRESHOLD


def attention_banner(result: Optional[SeverityResult]) -> bool:
    """Show "<tier> - Immediate Attention Required" when the score is above 50.

    Returns True when the banner was drawn.
    """
    if not needs_attention(result):
        return False
    level = result.level
    st.markdown(
        f"<div class='fc-card {level.warning_class}'>⚠️ <b>{level.text} - Immediate Attention Required</b></div>",
        unsafe_allow_html=True,
    )
    return True
