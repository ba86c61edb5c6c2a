"""Database configuration for reference data."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from groceryplanner.config import get_settings


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create a sync engine; reference data is read in short batch loads."""
    settings = get_settings()
    url = database_url or settings.database_url
    return create_engine(url, echo=settings.is_development and settings.log_level == "DEBUG")


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Build a session factory bound to the given engine."""
    return sessionmaker(engine, expire_on_commit=False)
