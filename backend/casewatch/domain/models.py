from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

REPORT_STATUS_PENDING = "pending"
REPORT_STATUS_VALIDATED = "validated"
REPORT_STATUS_REJECTED = "rejected"


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ValidatedReport:
    id: str
    location: GeoPoint
    report_date: datetime


@dataclass
class Cluster:
    centroid: GeoPoint
    members: List[ValidatedReport] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    def add(self, report: ValidatedReport) -> None:
        """Append ``report`` and move the centroid with a running mean."""
        self.members.append(report)
        n = len(self.members)
        self.centroid = GeoPoint(
            latitude=(self.centroid.latitude * (n - 1) + report.location.latitude) / n,
            longitude=(self.centroid.longitude * (n - 1) + report.location.longitude) / n,
        )


@dataclass(frozen=True)
class Hotspot:
    id: str
    location: GeoPoint
    intensity: float
    report_count: int
    last_report_date: datetime


@dataclass(frozen=True)
class RecomputeResult:
    success: bool
    hotspot_count: int
    message: str
    error: Optional[Exception] = None

    def as_dict(self) -> dict:
        payload = {
            "success": self.success,
            "hotspotCount": self.hotspot_count,
            "message": self.message,
        }
        if self.error is not None:
            payload["error"] = str(self.error)
        return payload
