from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import List, Optional, Sequence, Tuple

from casewatch.domain.models import Hotspot


@dataclass(frozen=True)
class HotspotSnapshot:
    version: int
    hotspots: Tuple[Hotspot, ...]
    replaced_at: Optional[datetime] = None


class InMemoryHotspotStore:
    """Hotspot set held as an immutable snapshot swapped by reference.

    Writers build the whole new tuple before publishing it, so a reader
    holding ``snapshot`` always sees one complete generation.
    """

    def __init__(self, initial: Sequence[Hotspot] = ()):
        self._write_lock = Lock()
        self._snapshot = HotspotSnapshot(version=0, hotspots=tuple(initial))

    @property
    def snapshot(self) -> HotspotSnapshot:
        return self._snapshot

    def replace_hotspots(self, hotspots: Sequence[Hotspot]) -> int:
        new_set = tuple(hotspots)
        with self._write_lock:
            self._snapshot = HotspotSnapshot(
                version=self._snapshot.version + 1,
                hotspots=new_set,
                replaced_at=datetime.now(timezone.utc),
            )
        return len(new_set)

    def list_hotspots(self, *, min_intensity: float = 0.0, limit: int = 100) -> List[Hotspot]:
        current = self._snapshot
        selected = [hs for hs in current.hotspots if hs.intensity >= min_intensity]
        selected.sort(key=lambda hs: (hs.intensity, hs.report_count), reverse=True)
        return selected[:limit]
