"""
Database session and engine.
"""
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from tee_alerts.config import settings
from tee_alerts.db.base import Base


def make_engine(database_url: str):
    """Engine for the given URL. SQLite files get their parent dir created and are shared across threads."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_size=8,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_timeout=30,
    )


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Create tables that don't exist yet (dev / SQLite). Production uses alembic upgrade head."""
    import tee_alerts.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


