"""Database initialization and utilities."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base


def create_db_engine(db_url: str = "sqlite:///breakouts.db", echo: bool = False):
    """Create SQLAlchemy engine."""
    return create_engine(db_url, echo=echo)


def init_database(db_url: str = "sqlite:///breakouts.db") -> None:
    """Initialize database and create all tables."""
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    print(f"[INFO] Database initialized: {db_url}")


def get_session(db_url: str = "sqlite:///breakouts.db") -> Session:
    """Get a new database session."""
    SessionFactory = sessionmaker(bind=create_db_engine(db_url))
    return SessionFactory()
