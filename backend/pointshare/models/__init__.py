"""SQLAlchemy models package."""
from pointshare.models.user import User
from pointshare.models.points import PointsBalance
from pointshare.models.request import Request, RequestStatus
from pointshare.models.notification import Notification

__all__ = [
    "User",
    "PointsBalance",
    "Request",
    "RequestStatus",
    "Notification",
]
