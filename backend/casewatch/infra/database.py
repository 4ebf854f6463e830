import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


def resolve_engine(engine: Optional[Engine] = None, database_url: Optional[str] = None) -> Engine:
    if engine is not None:
        return engine
    if database_url is None:
        database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL required if engine not provided")
    return create_engine(database_url, future=True)
