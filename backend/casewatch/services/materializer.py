from __future__ import annotations

from typing import Callable, Iterable, Optional

from loguru import logger

from casewatch.domain.errors import MaterializationFailure
from casewatch.domain.models import Cluster, RecomputeResult
from casewatch.domain.ports import HotspotStore
from casewatch.domain.scoring import build_hotspots, new_hotspot_id


class HotspotMaterializer:
    """Sole writer of the hotspot set: scores clusters and replaces the stored set."""

    def __init__(self, store: HotspotStore, id_factory: Optional[Callable[[], str]] = None):
        if store is None:
            raise ValueError("store is required")
        self.store = store
        self.id_factory = id_factory or new_hotspot_id

    def materialize(self, clusters: Iterable[Cluster]) -> RecomputeResult:
        hotspots = build_hotspots(clusters, self.id_factory)
        try:
            written = self.store.replace_hotspots(hotspots)
        except Exception as exc:
            failure = MaterializationFailure("failed to replace hotspot set", cause=exc)
            logger.error("Hotspot materialization failed: {!r}", exc)
            return RecomputeResult(
                success=False,
                hotspot_count=0,
                message="failed to materialize hotspots",
                error=failure,
            )
        return RecomputeResult(
            success=True,
            hotspot_count=written,
            message="hotspot analysis completed",
        )
