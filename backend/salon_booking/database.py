# backend/salon_booking/database.py
"""
Storage handle construction.

The engine and session factory are built explicitly by create_app() and kept
on app.state; routers and services receive them by injection.

SQLite runs in WAL mode so readers never wait for the writer. Transactions
opened with WRITE_TRANSACTION start with BEGIN IMMEDIATE, which serializes
writers on the database lock (the reservation write path relies on it, see
services/scheduling/locks.py). PostgreSQL uses row locks instead and ignores
the option.
"""

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .config import Settings

# Session.connection(execution_options=WRITE_TRANSACTION) before the first query
WRITE_TRANSACTION = {"sqlite_begin_immediate": True}


def build_engine(settings: Settings) -> Engine:
    if not settings.is_sqlite:
        return create_engine(settings.resolved_database_url, pool_pre_ping=True)

    # check_same_thread=False: sessions cross FastAPI worker threads
    engine = create_engine(
        settings.resolved_database_url,
        connect_args={
            "check_same_thread": False,
            "timeout": settings.sqlite_busy_timeout,
        },
    )

    @event.listens_for(engine, "connect")
    def _sqlite_on_connect(dbapi_connection, _):
        # Let SQLAlchemy emit BEGIN itself (pysqlite would defer it)
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _sqlite_on_begin(conn):
        if conn.get_execution_options().get("sqlite_begin_immediate"):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


# Dependency for FastAPI
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
