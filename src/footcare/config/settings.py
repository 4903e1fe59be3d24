from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from src.footcare.models.app_types import (
    READ_TIMEOUT_SEC,
    REFRESH_INTERVAL_SEC,
    ROOT_PATH,
    SELECTION_MODES,
)

load_dotenv()


@dataclass(frozen=True)
class StoreConfig:
    """Firebase project settings; opaque here, the store validates them."""

    api_key: str = ""
    auth_domain: str = ""
    database_url: str = ""
    project_id: str = ""
    storage_bucket: str = ""
    messaging_sender_id: str = ""
    app_id: str = ""
    measurement_id: str = ""
    credentials_path: str = ""


@dataclass(frozen=True)
class Settings:
    store: StoreConfig
    root_path: str = ROOT_PATH
    refresh_sec: float = REFRESH_INTERVAL_SEC
    read_timeout_sec: float = READ_TIMEOUT_SEC
    selection_mode: str = "random"
    log_level: str = "INFO"

    @property
    def use_firebase(self) -> bool:
        return bool(self.store.database_url)


def _positive_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be > 0, got {raw!r}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env

    store = StoreConfig(
        api_key=env.get("FIREBASE_API_KEY", ""),
        auth_domain=env.get("FIREBASE_AUTH_DOMAIN", ""),
        database_url=env.get("FIREBASE_DATABASE_URL", ""),
        project_id=env.get("FIREBASE_PROJECT_ID", ""),
        storage_bucket=env.get("FIREBASE_STORAGE_BUCKET", ""),
        messaging_sender_id=env.get("FIREBASE_MESSAGING_SENDER_ID", ""),
        app_id=env.get("FIREBASE_APP_ID", ""),
        measurement_id=env.get("FIREBASE_MEASUREMENT_ID", ""),
        credentials_path=env.get("FIREBASE_CREDENTIALS", ""),
    )

    mode = env.get("FOOTCARE_SELECTION_MODE", "random").strip().lower() or "random"
    if mode not in SELECTION_MODES:
        raise ValueError(f"FOOTCARE_SELECTION_MODE must be one of {SELECTION_MODES}, got {mode!r}")

    return Settings(
        store=store,
        root_path=env.get("FOOTCARE_ROOT_PATH", "").strip("/ ") or ROOT_PATH,
        refresh_sec=_positive_float(env, "FOOTCARE_REFRESH_SEC", REFRESH_INTERVAL_SEC),
        read_timeout_sec=_positive_float(env, "FOOTCARE_READ_TIMEOUT_SEC", READ_TIMEOUT_SEC),
        selection_mode=mode,
        log_level=env.get("FOOTCARE_LOG_LEVEL", "INFO").upper(),
    )
