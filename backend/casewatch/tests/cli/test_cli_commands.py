from __future__ import annotations

import sys
from datetime import datetime

import pytest
from loguru import logger
from sqlalchemy import create_engine, insert
from typer.testing import CliRunner

from casewatch.cli.main import app
from casewatch.infra.db.tables import metadata, reports_table


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture()
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    engine = create_engine(url, future=True)
    metadata.create_all(engine)
    with engine.begin() as conn:
        for idx in range(11):
            conn.execute(
                insert(reports_table).values(
                    id=f"r{idx}",
                    status="validated",
                    latitude=6.9 + idx * 0.0001,
                    longitude=122.07,
                    report_date=datetime(2026, 3, 1 + idx, 12, 0, 0),
                )
            )
    engine.dispose()
    return url


def test_recompute_command(database_url):
    runner = CliRunner()
    result = runner.invoke(app, ["recompute", "--database-url", database_url])
    assert result.exit_code == 0
    assert "1 hotspots" in result.stdout


def test_hotspots_command_lists_after_recompute(database_url):
    runner = CliRunner()
    runner.invoke(app, ["recompute", "--database-url", database_url])
    result = runner.invoke(app, ["hotspots", "--database-url", database_url])
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert lines[0].startswith("lat\tlon\tintensity")
    assert "\t1.00\thigh\t11\t" in lines[1]


def test_hotspots_command_without_data(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["hotspots", "--database-url", f"sqlite:///{tmp_path / 'none.db'}"])
    assert result.exit_code == 0
    assert "No hotspots stored" in result.stdout


def test_recompute_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    runner = CliRunner()
    result = runner.invoke(app, ["recompute"])
    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
