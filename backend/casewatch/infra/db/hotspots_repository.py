from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.engine import Engine

from casewatch.domain.models import GeoPoint, Hotspot

from .tables import hotspots_table


class HotspotsRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def replace_hotspots(self, hotspots: Sequence[Hotspot]) -> int:
        now = datetime.now(timezone.utc)
        payload = [
            {
                "id": hotspot.id,
                "latitude": hotspot.location.latitude,
                "longitude": hotspot.location.longitude,
                "intensity": hotspot.intensity,
                "report_count": hotspot.report_count,
                "last_report_date": hotspot.last_report_date,
                "created_at": now,
            }
            for hotspot in hotspots
        ]
        # delete + insert share one transaction; readers see the old or the new set
        with self.engine.begin() as conn:
            conn.execute(delete(hotspots_table))
            if payload:
                conn.execute(insert(hotspots_table), payload)
        return len(payload)

    def list_hotspots(self, *, min_intensity: float = 0.0, limit: int = 100) -> List[Hotspot]:
        with self.engine.begin() as conn:
            rows = conn.execute(
                select(hotspots_table)
                .where(hotspots_table.c.intensity >= min_intensity)
                .order_by(hotspots_table.c.intensity.desc(), hotspots_table.c.report_count.desc())
                .limit(limit)
            ).mappings().all()
        return [_row_to_hotspot(row) for row in rows]

    def count(self) -> int:
        with self.engine.begin() as conn:
            return conn.execute(select(func.count()).select_from(hotspots_table)).scalar_one()


def _row_to_hotspot(row) -> Hotspot:
    return Hotspot(
        id=row["id"],
        location=GeoPoint(latitude=row["latitude"], longitude=row["longitude"]),
        intensity=row["intensity"],
        report_count=row["report_count"],
        last_report_date=row["last_report_date"],
    )
