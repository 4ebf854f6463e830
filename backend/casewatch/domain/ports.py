from __future__ import annotations

from typing import List, Protocol, Sequence

from .models import Hotspot, ValidatedReport


class ReportSource(Protocol):
    """Read side of the report store, as seen by the hotspot engine."""

    def fetch_validated_reports(self) -> List[ValidatedReport]:
        """Return the full current set of validated reports.

        Implementations must return a stable order for an unchanged set;
        clustering depends on it.
        """
        raise NotImplementedError


class HotspotStore(Protocol):
    def replace_hotspots(self, hotspots: Sequence[Hotspot]) -> int:
        """Delete every stored hotspot, then insert ``hotspots``.

        Returns the number of hotspots written.
        """
        raise NotImplementedError

    def list_hotspots(self, *, min_intensity: float = 0.0, limit: int = 100) -> List[Hotspot]:
        raise NotImplementedError


class NotificationSink(Protocol):
    def notify_hotspots_changed(self) -> None:
        raise NotImplementedError
