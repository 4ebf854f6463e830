from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert

from casewatch.api.main import create_app
from casewatch.infra.db.tables import metadata, reports_table

SEED_REPORTS = [
    ("r1", 10.000, 125.000, "validated", 1),
    ("r2", 10.0001, 125.0001, "validated", 2),
    ("r3", 10.000, 126.000, "validated", 3),
    ("r4", 14.6000, 121.0000, "validated", 4),
    ("r5", 14.6002, 121.0001, "validated", 5),
    ("r6", 14.6001, 121.0003, "validated", 6),
    ("r7", 14.6003, 121.0002, "validated", 7),
    ("r8", 14.6004, 121.0000, "validated", 8),
    ("r9", 14.6, 121.0, "pending", 9),
]


def _seed(engine):
    with engine.begin() as conn:
        for report_id, lat, lon, status, day in SEED_REPORTS:
            conn.execute(
                insert(reports_table).values(
                    id=report_id,
                    status=status,
                    latitude=lat,
                    longitude=lon,
                    report_date=datetime(2026, 3, day, 10, 0, 0),
                )
            )


@pytest.fixture()
def api_engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'api_tests.db'}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    metadata.create_all(engine)
    _seed(engine)
    yield engine
    metadata.drop_all(engine)


@pytest.fixture()
def api_client(api_engine, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    app = create_app(engine=api_engine)
    with TestClient(app) as client:
        yield client
