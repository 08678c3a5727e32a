"""Points balance model."""
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from pointshare.database import Base


class PointsBalance(Base):
    """Dining points held by a single user.

    One row per user, created lazily with a zero balance the first time the
    user touches the ledger. Rows are never deleted.
    """

    __tablename__ = "points"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_points_balance_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    balance = Column(Integer, nullable=False, default=0)
    created_at = Column(String(26), default=lambda: datetime.utcnow().isoformat())
    updated_at = Column(String(26), default=lambda: datetime.utcnow().isoformat(), onupdate=lambda: datetime.utcnow().isoformat())

    # Relationships
    user = relationship("User", back_populates="points")
