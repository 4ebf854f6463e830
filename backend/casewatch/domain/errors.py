from __future__ import annotations

from typing import Optional


class HotspotError(Exception):
    """Base error for the hotspot recomputation pipeline."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class FetchFailure(HotspotError):
    """The validated-report snapshot could not be read."""


class MaterializationFailure(HotspotError):
    """Replacing the hotspot set failed; the stored set may be stale or empty."""


class MalformedReport(HotspotError):
    def __init__(self, report_id: str, reason: str):
        super().__init__(f"report {report_id} has malformed coordinates: {reason}")
        self.report_id = report_id
        self.reason = reason
