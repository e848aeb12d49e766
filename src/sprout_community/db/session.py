"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from sprout_community.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import sprout_community.models  # noqa: E402,F401


def _enable_sqlite_transactions(engine: Engine) -> None:
    """Hand transaction control on pysqlite connections to SQLAlchemy.

    The driver only sends BEGIN ahead of DML, which leaves consecutive SELECTs
    in autocommit, each seeing whatever was committed last. With these hooks a
    session transaction spans its reads as well.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        # WAL lets an open reader keep its snapshot while another connection commits.
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def make_engine(url: str) -> Engine:
    """Create an engine for ``url`` with the per-dialect setup applied."""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, echo=settings.sql_debug)

    # SQLite connections are handed across the threadpool FastAPI runs sync deps in.
    engine = create_engine(
        url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args={"check_same_thread": False},
    )
    _enable_sqlite_transactions(engine)
    return engine


engine = make_engine(settings.effective_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
