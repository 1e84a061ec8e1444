"""
Database configuration module.

Sets up the SQLAlchemy engine, session factory, and declarative base for ORM models.

Exports:
    - engine: SQLAlchemy database engine.
    - SessionLocal: Session factory for database interactions.
    - Base: Declarative base class for defining ORM models.
    - utcnow: Naive UTC timestamp used by every timestamp column.
    - fold_text: Unicode case folding, registered on SQLite as ``crm_fold``.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from configs import settings


def utcnow() -> datetime:
    """Return the current UTC time without tzinfo, as stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


SQLITE_FOLD_FUNCTION = "crm_fold"


def fold_text(value: Optional[str]) -> Optional[str]:
    """
    Case-fold text for searching.

    Turkish dotted and dotless i fold to a plain ``i`` so that "YILMAZ",
    "Yılmaz" and "yilmaz" compare equal.
    """
    if value is None:
        return None
    return value.casefold().replace("\u0307", "").replace("ı", "i")


def build_engine(url: str, **kwargs: Any) -> Engine:
    """
    Create an engine.

    On SQLite, foreign keys are switched on and ``crm_fold`` is registered on
    every connection, since SQLite's own ``lower()`` only folds ASCII.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    db_engine = create_engine(url, **kwargs)

    if db_engine.dialect.name == "sqlite":

        @event.listens_for(db_engine, "connect")
        def _configure_sqlite(dbapi_connection: Any, _record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            dbapi_connection.create_function(
                SQLITE_FOLD_FUNCTION, 1, fold_text, deterministic=True
            )

    return db_engine


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()
