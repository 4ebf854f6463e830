from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import math

from loguru import logger

from .errors import MalformedReport
from .models import Cluster, GeoPoint, ValidatedReport

# Planar distance in raw degrees; ~0.01 deg is roughly 1 km near the equator.
# Tuned against the Euclidean metric below, re-tune before switching to haversine.
DISTANCE_THRESHOLD = 0.01

LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)


@dataclass
class ClusteringOutcome:
    clusters: List[Cluster] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def clustered_count(self) -> int:
        return sum(cluster.size for cluster in self.clusters)


def planar_distance(a: GeoPoint, b: GeoPoint) -> float:
    return math.hypot(a.latitude - b.latitude, a.longitude - b.longitude)


def validate_location(report: ValidatedReport) -> None:
    location = report.location
    if location is None:
        raise MalformedReport(report.id, "missing location")
    for name, value, (low, high) in (
        ("latitude", location.latitude, LAT_RANGE),
        ("longitude", location.longitude, LON_RANGE),
    ):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedReport(report.id, f"{name} is not numeric ({value!r})")
        if not math.isfinite(value):
            raise MalformedReport(report.id, f"{name} is not finite ({value!r})")
        if value < low or value > high:
            raise MalformedReport(report.id, f"{name} {value} outside [{low}, {high}]")


def _first_fit(clusters: List[Cluster], point: GeoPoint, threshold: float) -> Optional[Cluster]:
    # First cluster in creation order within range, not the nearest one.
    for cluster in clusters:
        if planar_distance(point, cluster.centroid) <= threshold:
            return cluster
    return None


def run_clustering(
    reports: Iterable[ValidatedReport],
    threshold: float = DISTANCE_THRESHOLD,
) -> ClusteringOutcome:
    """Group reports into clusters by single-pass first-fit assignment.

    Reports are visited in input order. Each one joins the first existing
    cluster whose current centroid lies within ``threshold`` degrees
    (inclusive); otherwise it opens a new singleton cluster. The result is
    deterministic for a fixed input order but depends on that order.

    Reports with missing, non-numeric, non-finite or out-of-range coordinates
    are skipped and logged instead of being folded into a centroid.
    """
    outcome = ClusteringOutcome()
    for report in reports:
        try:
            validate_location(report)
        except MalformedReport as exc:
            logger.warning("Skipping report during clustering: {}", exc)
            outcome.skipped.append(report.id)
            continue
        cluster = _first_fit(outcome.clusters, report.location, threshold)
        if cluster is None:
            outcome.clusters.append(Cluster(centroid=report.location, members=[report]))
        else:
            cluster.add(report)
    return outcome


def cluster_reports(
    reports: Iterable[ValidatedReport],
    threshold: float = DISTANCE_THRESHOLD,
) -> List[Cluster]:
    return run_clustering(reports, threshold).clusters
