"""FastAPI dependency handing each request its own CRM database session."""

from typing import Generator

from sqlalchemy.orm import Session

from src.repositories.crm.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Open a session for the request and close it once the response is sent.

    Services commit their own work; anything left uncommitted is discarded on close.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
