from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from casewatch.api.deps import get_hotspot_store, get_recomputer
from casewatch.domain.models import Hotspot
from casewatch.domain.ports import HotspotStore
from casewatch.domain.scoring import intensity_band
from casewatch.services.recompute import HotspotRecomputer

router = APIRouter(tags=["hotspots"])


@router.get("/hotspots")
def list_hotspots(
    min_intensity: float = Query(0.0, ge=0.0, le=1.0, description="Minimum intensity"),
    max_results: int = Query(100, ge=1, le=1000, description="Maximum number of hotspots"),
    store: HotspotStore = Depends(get_hotspot_store),
):
    hotspots = store.list_hotspots(min_intensity=min_intensity, limit=max_results)
    return {
        "type": "FeatureCollection",
        "features": [_to_feature(hs) for hs in hotspots],
    }


@router.post("/hotspots/recompute")
def recompute_hotspots(recomputer: HotspotRecomputer = Depends(get_recomputer)):
    result = recomputer.recompute()
    if not result.success:
        raise HTTPException(status_code=500, detail=result.message)
    return result.as_dict()


def _to_feature(hotspot: Hotspot) -> dict:
    last_report = hotspot.last_report_date
    return {
        "type": "Feature",
        "properties": {
            "id": hotspot.id,
            "intensity": hotspot.intensity,
            "band": intensity_band(hotspot.intensity),
            "reportCount": hotspot.report_count,
            "lastReportDate": last_report.isoformat() if last_report else None,
        },
        "geometry": {
            "type": "Point",
            "coordinates": [hotspot.location.longitude, hotspot.location.latitude],
        },
    }
