"""Notification service for request outcomes."""
import logging

from sqlalchemy.orm import Session

from pointshare.models.notification import REQUEST_ACCEPTED, REQUEST_DECLINED, Notification
from pointshare.models.request import Request

logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = {REQUEST_ACCEPTED, REQUEST_DECLINED}


def create_notification(
    db: Session,
    user_id: str,
    notification_type: str,
    message: str,
) -> Notification:
    """Add an in-app notification to the current transaction.

    The caller commits, so a notification about an accepted request is only
    stored if the acceptance itself is.
    """
    if notification_type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {notification_type}")

    notification = Notification(
        user_id=user_id,
        type=notification_type,
        message=message,
    )
    db.add(notification)
    db.flush()
    return notification


def describe_outcome(request: Request, donor_name: str, notification_type: str) -> str:
    """Human-readable summary of what happened to a request."""
    verb = "accepted" if notification_type == REQUEST_ACCEPTED else "declined"
    return (
        f"{donor_name} {verb} your request for {request.points_requested} points "
        f"at {request.location}."
    )


def notify_requester(db: Session, request: Request, donor_name: str, notification_type: str) -> Notification:
    """Tell the requester that a donor acted on their request."""
    notification = create_notification(
        db,
        request.requester_id,
        notification_type,
        describe_outcome(request, donor_name, notification_type),
    )
    logger.debug(f"Queued {notification_type} notification for user {request.requester_id}")
    return notification


def list_notifications(
    db: Session,
    user_id: str,
    unread_only: bool = False,
    limit: int = 50,
) -> list[Notification]:
    """Get a user's notifications, newest first."""
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.read == 0)
    return query.order_by(Notification.created_at.desc()).limit(limit).all()


def mark_notification_read(
    db: Session,
    user_id: str,
    notification_id: str,
    read: bool = True,
) -> Notification | None:
    """Flip the read flag on one of the user's own notifications.

    Returns None if the notification does not exist or belongs to someone
    else.
    """
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user_id,
    ).first()

    if not notification:
        return None

    notification.read = 1 if read else 0
    db.commit()
    db.refresh(notification)
    return notification
