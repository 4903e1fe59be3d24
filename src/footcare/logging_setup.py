"""Logging helpers for the foot-health monitor."""
from __future__ import annotations

import logging
import re

# Patient names travel as "name=<value>" in log messages.
_RE_NAME = re.compile(r"(name=)([^,;()\s=]+(?: [^,;()\s=]+)*)")


class PHIRedactor(logging.Filter):
    """Filter that masks patient names in log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if record.args:
            record.msg = record.getMessage()
            record.args = ()
        if isinstance(record.msg, str):
            record.msg = _RE_NAME.sub(r"\1[REDACTED]", record.msg)
        return True


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure global logging handlers."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, PHIRedactor) for f in handler.filters):
            handler.addFilter(PHIRedactor())
