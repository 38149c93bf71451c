"""Whole alert store (alerts, notifications, settings) as one JSON document per key. Replaced on every write."""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from tee_alerts.db.base import Base


class AlertDocument(Base):
    __tablename__ = "alert_documents"

    doc_key = Column(String(64), primary_key=True)
    payload_json = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
