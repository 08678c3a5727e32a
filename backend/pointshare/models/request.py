"""Points request model."""
import enum
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from pointshare.database import Base


class RequestStatus(str, enum.Enum):
    """Lifecycle states of a request. Accepted and declined are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class Request(Base):
    """A user's ask for dining points from other users."""

    __tablename__ = "requests"
    __table_args__ = (
        CheckConstraint("points_requested > 0", name="ck_requests_points_positive"),
        CheckConstraint("requester_id != donor_id", name="ck_requests_no_self_donation"),
        Index("ix_requests_status_created", "status", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    requester_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    donor_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"))  # Set on accept/decline

    location = Column(String(100), nullable=False)
    points_requested = Column(Integer, nullable=False)  # Fixed at creation
    message = Column(Text)

    # pending, accepted, declined
    status = Column(String(20), nullable=False, default=RequestStatus.PENDING.value)

    # Timestamps
    created_at = Column(String(26), default=lambda: datetime.utcnow().isoformat())
    updated_at = Column(String(26), default=lambda: datetime.utcnow().isoformat(), onupdate=lambda: datetime.utcnow().isoformat())

    # Relationships
    requester = relationship("User", back_populates="requests", foreign_keys=[requester_id])
    donor = relationship("User", foreign_keys=[donor_id])
