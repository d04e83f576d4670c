"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from threadboard.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def configure_sqlite_engine(engine: Engine) -> Engine:
    """Make every SQLite transaction take the write lock up front.

    pysqlite defers BEGIN until the first write, so two transactions can both
    read a message and then race on the upgrade to a write lock. Emitting
    BEGIN IMMEDIATE serializes writers for the whole read-modify-write.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


# Ensure model modules are imported so that metadata is populated when create_all runs.
import threadboard.models  # noqa: E402,F401

_connect_args = (
    {"check_same_thread": False}
    if settings.effective_database_url.startswith("sqlite")
    else {}
)

engine = configure_sqlite_engine(
    create_engine(
        settings.effective_database_url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args=_connect_args,
    )
)

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


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
