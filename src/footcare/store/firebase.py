"""Firebase Realtime Database adapter.

`connect()` initialises the firebase-admin app once per process; later calls
with the same config hand back the same handle.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError
from google.auth.exceptions import GoogleAuthError

from src.footcare.config.settings import StoreConfig
from src.footcare.errors import StoreConnectionError
from src.footcare.store.base import DataCallback, ErrorCallback

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_handle: Optional["FirebaseStore"] = None


class FirebaseStore:
    def __init__(self, app: Any, config: StoreConfig) -> None:
        self.app = app
        self.config = config

    def subscribe(self, path: str, on_data: DataCallback, on_error: ErrorCallback) -> Any:
        ref = db.reference(path, app=self.app)

        def _on_event(event: Any) -> None:
            # Events may carry a partial patch; always hand out the whole node.
            try:
                value = event.data if event.path == "/" else ref.get()
            except (FirebaseError, GoogleAuthError, ValueError) as exc:
                on_error(str(exc))
                return
            on_data(value)

        try:
            return ref.listen(_on_event)
        except (FirebaseError, GoogleAuthError, ValueError) as exc:
            on_error(str(exc))
            return None

    def unsubscribe(self, token: Any) -> None:
        if token is None:
            return
        try:
            token.close()
        except FirebaseError as exc:
            logger.warning("closing listener failed: %s", exc)


def connect(config: StoreConfig) -> FirebaseStore:
    global _handle
    with _lock:
        if _handle is not None:
            if _handle.config != config:
                raise StoreConnectionError("Firebase already initialized with a different configuration")
            return _handle

        options = {"databaseURL": config.database_url}
        if config.project_id:
            options["projectId"] = config.project_id
        if config.storage_bucket:
            options["storageBucket"] = config.storage_bucket

        try:
            cred = (
                credentials.Certificate(config.credentials_path)
                if config.credentials_path
                else credentials.ApplicationDefault()
            )
            try:
                app = firebase_admin.get_app()
            except ValueError:
                app = firebase_admin.initialize_app(cred, options)
        except (FirebaseError, GoogleAuthError, ValueError, OSError) as exc:
            logger.error("firebase init failed: %s", exc)
            raise StoreConnectionError() from exc

        logger.info("connected to %s", config.database_url)
        _handle = FirebaseStore(app, config)
        return _handle


def reset() -> None:
    """Drop the cached handle (the firebase app itself stays initialised)."""
    global _handle
    with _lock:
        _handle = None
