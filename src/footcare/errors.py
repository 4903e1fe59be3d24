from __future__ import annotations


class TelemetryError(Exception):
    """Base class; str(err) is the message shown in the error banner."""

    message = "Telemetry error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class StoreConnectionError(TelemetryError):
    message = "Failed to initialize Firebase"


class NoPatientGroups(TelemetryError):
    message = "No patient groups found"


class NoPatientData(TelemetryError):
    message = "No patient data found"


class StoreError(TelemetryError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Firebase Error: {detail}")
