from __future__ import annotations

import uuid
from typing import Callable, Iterable, List

from .models import Cluster, Hotspot

# Dashboards band intensity as low/medium/high; changing these is a breaking
# change for map consumers.
INTENSITY_DIVISOR = 10.0
MAX_INTENSITY = 1.0
MIN_CLUSTER_SIZE = 2

LOW_BAND_UPPER = 0.4
HIGH_BAND_LOWER = 0.7


def intensity_for(report_count: int) -> float:
    return min(MAX_INTENSITY, report_count / INTENSITY_DIVISOR)


def intensity_band(intensity: float) -> str:
    if intensity < LOW_BAND_UPPER:
        return "low"
    if intensity > HIGH_BAND_LOWER:
        return "high"
    return "medium"


def new_hotspot_id() -> str:
    return str(uuid.uuid4())


def score_cluster(cluster: Cluster, id_factory: Callable[[], str] = new_hotspot_id) -> Hotspot:
    if not cluster.members:
        raise ValueError("cannot score an empty cluster")
    count = cluster.size
    return Hotspot(
        id=id_factory(),
        location=cluster.centroid,
        intensity=intensity_for(count),
        report_count=count,
        last_report_date=max(member.report_date for member in cluster.members),
    )


def build_hotspots(
    clusters: Iterable[Cluster],
    id_factory: Callable[[], str] = new_hotspot_id,
) -> List[Hotspot]:
    """Turn clusters into hotspots, dropping clusters below ``MIN_CLUSTER_SIZE``.

    Ids are generated fresh on every call; hotspots carry no identity
    across recomputations.
    """
    return [
        score_cluster(cluster, id_factory)
        for cluster in clusters
        if cluster.size >= MIN_CLUSTER_SIZE
    ]
