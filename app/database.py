"""Engine setup for the relational schema.

The running service keeps its data in memory; this module only serves tools
and tests that materialize the equivalent relational schema.
"""

from typing import Any

from sqlalchemy import create_engine, event, pool
from sqlalchemy.engine import Engine

from app.config import settings
from app.models import metadata


def make_engine(url: str | None = None) -> Engine:
    """
    Create a sync engine.

    Args:
        url: Database URL, defaults to ``DATABASE_URL``

    Returns:
        Engine with SQLite foreign keys enforced
    """
    url = url or settings.database_url
    options: dict[str, Any] = {"echo": settings.debug}
    if url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across checkouts
        options["poolclass"] = pool.StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True

    engine = create_engine(url, **options)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", set_sqlite_pragma)

    return engine


def set_sqlite_pragma(dbapi_conn: Any, connection_record: Any) -> None:
    """Enable foreign keys so ON DELETE CASCADE applies in SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_schema(engine: Engine) -> None:
    """Create every table of the relational schema."""
    metadata.create_all(engine)


def drop_schema(engine: Engine) -> None:
    """Drop every table of the relational schema."""
    metadata.drop_all(engine)
