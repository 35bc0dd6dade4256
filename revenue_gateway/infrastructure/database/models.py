"""SQLAlchemy ORM models for application and event records"""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class MerchantApplication(Base):
    """Merchant credit application; source results and decision live in the JSON document"""

    __tablename__ = "merchant_application"

    id = Column(Text, primary_key=True)
    merchant_id = Column(Text, nullable=False, index=True)
    decision_status = Column(Text, nullable=False, index=True)
    document = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class MerchantEvent(Base):
    """Tracked frontend event; `metadata` is reserved on declarative classes, hence `event_metadata`"""

    __tablename__ = "merchant_event"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_name = Column(String(100), nullable=False, index=True)
    merchant_id = Column(Text, nullable=False, index=True)
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)
    occurred_at = Column(DateTime(timezone=True), nullable=False)
