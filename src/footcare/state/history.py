from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List

from src.footcare.models.app_types import HISTORY_MAXLEN, UpdateHistoryEntry


class UpdateHistoryLog:
    """Most-recent-first ledger of applied readings; old entries fall off the end."""

    def __init__(self, maxlen: int = HISTORY_MAXLEN) -> None:
        self._entries: Deque[UpdateHistoryEntry] = deque(maxlen=maxlen)

    def record(self, entry: UpdateHistoryEntry) -> None:
        self._entries.appendleft(entry)

    def entries(self) -> List[UpdateHistoryEntry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[UpdateHistoryEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
