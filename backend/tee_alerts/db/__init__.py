from tee_alerts.db.base import Base
from tee_alerts.db.session import engine, init_db, SessionLocal
from tee_alerts.db.tables import ALL_TABLE_NAMES

__all__ = ["engine", "init_db", "SessionLocal", "Base", "ALL_TABLE_NAMES"]
