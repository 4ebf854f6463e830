from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from casewatch.api.routers import hotspots
from casewatch.domain.ports import HotspotStore, NotificationSink
from casewatch.infra.db.hotspots_repository import HotspotsRepository
from casewatch.infra.db.reports_repository import ReportsRepository
from casewatch.notifications.sinks import BroadcastSink
from casewatch.services.recompute import HotspotRecomputer


def create_app(
    engine: Optional[Engine] = None,
    *,
    store: Optional[HotspotStore] = None,
    recomputer: Optional[HotspotRecomputer] = None,
    sink: Optional[NotificationSink] = None,
) -> FastAPI:
    app = FastAPI(title="Casewatch Hotspots API", version="0.1.0")
    if engine is None and store is None and recomputer is None:
        database_url = os.getenv("DATABASE_URL")
        engine = create_engine(database_url, future=True) if database_url else None

    if store is None and recomputer is not None:
        store = recomputer.store
    if store is None and engine is not None:
        store = HotspotsRepository(engine)
    if recomputer is not None:
        sink = recomputer.sink
    elif sink is None:
        sink = BroadcastSink()
    if recomputer is None and engine is not None and store is not None:
        recomputer = HotspotRecomputer(ReportsRepository(engine), store, sink)

    app.state.db_engine = engine
    app.state.hotspot_store = store
    app.state.recomputer = recomputer
    app.state.hotspot_sink = sink

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(hotspots.router, prefix="/api")
    return app


app = create_app()
