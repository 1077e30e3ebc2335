"""Database configuration for the videoclub service."""

from typing import Any, Dict

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from videoclub.core.config import settings

Base = declarative_base()


def _install_sqlite_locking(engine: Engine) -> None:
    """Open every SQLite transaction with BEGIN IMMEDIATE.

    SQLite has no row locks, so ``SELECT ... FOR UPDATE`` compiles to a plain
    select. Taking the write lock up front serializes ledger transactions the
    same way row locks do on PostgreSQL.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    options: Dict[str, Any] = {"pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.SQLITE_BUSY_TIMEOUT,
        }
    else:
        options.update(
            pool_size=10,
            max_overflow=20,
            pool_timeout=30,
            pool_recycle=1800,
        )

    engine = create_engine(url, **options)
    if url.get_backend_name() == "sqlite":
        _install_sqlite_locking(engine)
    return engine


def create_session_factory(bind: Engine) -> sessionmaker:
    # Committed objects stay readable without opening a new transaction,
    # which on SQLite would take the write lock until the session closes.
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = create_session_factory(engine)


__all__ = ["engine", "SessionLocal", "Base", "create_db_engine", "create_session_factory"]
