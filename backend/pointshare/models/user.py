"""User model."""
import uuid
from datetime import datetime

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from pointshare.database import Base


class User(Base):
    """User account."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(String(26), default=lambda: datetime.utcnow().isoformat())
    updated_at = Column(String(26), default=lambda: datetime.utcnow().isoformat(), onupdate=lambda: datetime.utcnow().isoformat())

    # Relationships
    points = relationship("PointsBalance", back_populates="user", uselist=False)
    requests = relationship(
        "Request",
        back_populates="requester",
        foreign_keys="Request.requester_id",
    )
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")
