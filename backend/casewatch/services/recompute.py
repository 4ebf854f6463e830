from __future__ import annotations

from threading import Lock
from typing import Optional

from loguru import logger

from casewatch.domain.clustering import DISTANCE_THRESHOLD, run_clustering
from casewatch.domain.errors import FetchFailure, HotspotError
from casewatch.domain.models import RecomputeResult
from casewatch.domain.ports import HotspotStore, NotificationSink, ReportSource
from casewatch.notifications.sinks import NullSink

from .materializer import HotspotMaterializer

NO_VALIDATED_REPORTS = "no validated reports"


class HotspotRecomputer:
    """Rebuild the hotspot set from the current validated reports.

    Calls are serialized through a lock held for the whole
    fetch/cluster/materialize cycle, so two validation events never
    interleave their delete-then-insert. ``recompute`` never raises: every
    failure comes back as an unsuccessful ``RecomputeResult``.
    """

    def __init__(
        self,
        reports: ReportSource,
        store: HotspotStore,
        sink: Optional[NotificationSink] = None,
        *,
        threshold: float = DISTANCE_THRESHOLD,
        materializer: Optional[HotspotMaterializer] = None,
    ):
        if reports is None or store is None:
            raise ValueError("reports and store are required")
        self.reports = reports
        self.store = store
        self.sink = sink or NullSink()
        self.threshold = threshold
        self.materializer = materializer or HotspotMaterializer(store)
        self._lock = Lock()

    def recompute(self) -> RecomputeResult:
        with self._lock:
            result = self._recompute_locked()
        if result.success:
            self._notify()
        return result

    def _recompute_locked(self) -> RecomputeResult:
        try:
            snapshot = self.reports.fetch_validated_reports()
        except Exception as exc:
            failure = FetchFailure("failed to read validated reports", cause=exc)
            logger.error("Hotspot recompute aborted, report fetch failed: {!r}", exc)
            return RecomputeResult(
                success=False,
                hotspot_count=0,
                message="failed to fetch validated reports",
                error=failure,
            )

        if not snapshot:
            logger.info("No validated reports; keeping existing hotspots")
            return RecomputeResult(success=True, hotspot_count=0, message=NO_VALIDATED_REPORTS)

        try:
            outcome = run_clustering(snapshot, self.threshold)
            if outcome.skipped:
                logger.warning(
                    "{} of {} validated reports skipped for malformed coordinates",
                    len(outcome.skipped),
                    len(snapshot),
                )
            result = self.materializer.materialize(outcome.clusters)
        except Exception as exc:
            failure = HotspotError("failed to compute hotspots", cause=exc)
            logger.error("Hotspot recompute aborted, clustering or scoring failed: {!r}", exc)
            return RecomputeResult(
                success=False,
                hotspot_count=0,
                message="failed to compute hotspots",
                error=failure,
            )
        if result.success:
            logger.info(
                "Hotspot recompute done: reports={} clusters={} hotspots={}",
                outcome.clustered_count,
                len(outcome.clusters),
                result.hotspot_count,
            )
        return result

    def _notify(self) -> None:
        try:
            self.sink.notify_hotspots_changed()
        except Exception as exc:
            logger.warning("Hotspot change notification failed: {!r}", exc)
