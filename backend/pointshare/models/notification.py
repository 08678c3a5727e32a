"""Notification model for request outcomes."""
import uuid
from datetime import datetime

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from pointshare.database import Base

REQUEST_ACCEPTED = "request_accepted"
REQUEST_DECLINED = "request_declined"


class Notification(Base):
    """Informational message for a user about one of their requests."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_unread", "user_id", "read"),
        Index("ix_notifications_created", "user_id", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Notification type: request_accepted, request_declined
    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)

    # Status
    read = Column(Integer, default=0)  # SQLite boolean

    # Timestamps
    created_at = Column(String(26), default=lambda: datetime.utcnow().isoformat())
    updated_at = Column(String(26), default=lambda: datetime.utcnow().isoformat(), onupdate=lambda: datetime.utcnow().isoformat())

    user = relationship("User", back_populates="notifications")
