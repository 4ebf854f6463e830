
from __future__ import annotations

from typing import Optional

from casewatch.infra.database import resolve_engine
from casewatch.infra.db.hotspots_repository import HotspotsRepository
from casewatch.infra.db.reports_repository import ReportsRepository
from casewatch.infra.db.tables import metadata
from casewatch.notifications.sinks import LoggingSink
from casewatch.services.recompute import HotspotRecomputer


def recompute_hotspots(*, engine=None, database_url: Optional[str] = None) -> dict:
    engine = resolve_engine(engine, database_url)
    metadata.create_all(engine)

    recomputer = HotspotRecomputer(
        ReportsRepository(engine),
        HotspotsRepository(engine),
        LoggingSink(),
    )
    result = recomputer.recompute()
    summary = result.as_dict()
    db_url = getattr(engine, "url", database_url)
    print(
        f"[recompute_hotspots] db={db_url} success={result.success} "
        f"hotspots={result.hotspot_count} message={result.message!r}"
    )
    return summary

