from __future__ import annotations

from fastapi import HTTPException, Request

from casewatch.domain.ports import HotspotStore
from casewatch.services.recompute import HotspotRecomputer


def get_hotspot_store(request: Request) -> HotspotStore:
    store = getattr(request.app.state, "hotspot_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Hotspot store not configured")
    return store


def get_recomputer(request: Request) -> HotspotRecomputer:
    recomputer = getattr(request.app.state, "recomputer", None)
    if recomputer is None:
        raise HTTPException(status_code=500, detail="Hotspot recomputer not configured")
    return recomputer
