from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, Index, Integer, MetaData, Table, Text

metadata = MetaData()

# Minimal projection of the report store; the CRUD surface owns the full schema.
reports_table = Table(
    "reports",
    metadata,
    Column("id", Text, primary_key=True),
    Column("status", Text, nullable=False, default="pending"),
    Column("latitude", Float),
    Column("longitude", Float),
    Column("report_date", DateTime(timezone=True), nullable=False),
    Column("validated_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True)),
    Index("ix_reports_status", "status"),
)

hotspots_table = Table(
    "hotspots",
    metadata,
    Column("id", Text, primary_key=True),
    Column("latitude", Float, nullable=False),
    Column("longitude", Float, nullable=False),
    Column("intensity", Float, nullable=False),
    Column("report_count", Integer, nullable=False),
    Column("last_report_date", DateTime(timezone=True), nullable=False),
    Column("created_at", DateTime(timezone=True)),
    Index("ix_hotspots_location", "latitude", "longitude"),
    Index("ix_hotspots_intensity", "intensity"),
)
