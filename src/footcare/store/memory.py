from __future__ import annotations

import copy
import itertools
import logging
import threading
from typing import Any, Dict, Tuple

from src.footcare.store.base import DataCallback, ErrorCallback, split_path

logger = logging.getLogger(__name__)


class MemoryStore:
    """In-process tree store with the same subscribe contract as the Firebase adapter.

    Subscribers get the node's current value right away and again whenever a
    write touches their node (an ancestor or descendant path).
    """

    def __init__(self, data: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(data) if data else {}
        self._subs: Dict[int, Tuple[list[str], DataCallback, ErrorCallback]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def get(self, path: str) -> Any:
        with self._lock:
            node: Any = self._data
            for part in split_path(path):
                if not isinstance(node, dict) or part not in node:
                    return None
                node = node[part]
            if node == {}:
                return None
            return copy.deepcopy(node)

    def set(self, path: str, value: Any) -> None:
        parts = split_path(path)
        with self._lock:
            if not parts:
                self._data = copy.deepcopy(value) if isinstance(value, dict) else {}
            else:
                node = self._data
                for part in parts[:-1]:
                    node = node.setdefault(part, {})
                if value is None:
                    node.pop(parts[-1], None)
                else:
                    node[parts[-1]] = copy.deepcopy(value)
            targets = [
                (sub_path, on_data)
                for sub_path, on_data, _ in self._subs.values()
                if _related(sub_path, parts)
            ]
        for sub_path, on_data in targets:
            on_data(self.get("/".join(sub_path)))

    def fail(self, path: str, message: str) -> None:
        """Report a transport error to every subscriber of `path`."""
        parts = split_path(path)
        with self._lock:
            targets = [on_error for p, _, on_error in self._subs.values() if p == parts]
        for on_error in targets:
            on_error(message)

    def subscribe(self, path: str, on_data: DataCallback, on_error: ErrorCallback) -> int:
        token = next(self._ids)
        with self._lock:
            self._subs[token] = (split_path(path), on_data, on_error)
        logger.debug("subscribe #%d %s", token, path)
        on_data(self.get(path))
        return token

    def unsubscribe(self, token: int) -> None:
        with self._lock:
            self._subs.pop(token, None)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subs)


def _related(a: list[str], b: list[str]) -> bool:
    n = min(len(a), len(b))
    return a[:n] == b[:n]
