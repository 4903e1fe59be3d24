from __future__ import annotations

from typing import Any, Callable, Protocol

DataCallback = Callable[[Any], None]
ErrorCallback = Callable[[str], None]


class Store(Protocol):
    """Read-only subscribe interface of the hierarchical patient store.

    `on_data` receives the full value of the node at `path` (None when the
    node is empty); `on_error` receives a transport error message. Either may
    be called from a thread other than the subscriber's.
    """

    def subscribe(self, path: str, on_data: DataCallback, on_error: ErrorCallback) -> Any:
        ...

    def unsubscribe(self, token: Any) -> None:
        ...


def split_path(path: str) -> list[str]:
    return [part for part in path.strip("/").split("/") if part]
