# leetlog/models/user.py
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone


Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityRecord(Base):
    """One row per user; `document` holds the whole activity log as JSON."""
    __tablename__ = "activity_logs"
    user_id = Column(String, primary_key=True, index=True)
    document = Column(Text, nullable=False, default="{}")
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
