from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.engine import Engine

from casewatch.domain.models import REPORT_STATUS_VALIDATED, GeoPoint, ValidatedReport

from .tables import reports_table


class ReportsRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def fetch_validated_reports(self) -> List[ValidatedReport]:
        with self.engine.begin() as conn:
            rows = conn.execute(
                select(
                    reports_table.c.id,
                    reports_table.c.latitude,
                    reports_table.c.longitude,
                    reports_table.c.report_date,
                )
                .where(reports_table.c.status == REPORT_STATUS_VALIDATED)
                .order_by(reports_table.c.report_date, reports_table.c.id)
            ).mappings().all()
        return [_row_to_report(row) for row in rows]


def _row_to_report(row) -> ValidatedReport:
    return ValidatedReport(
        id=str(row["id"]),
        location=GeoPoint(latitude=row["latitude"], longitude=row["longitude"]),
        report_date=row["report_date"],
    )
