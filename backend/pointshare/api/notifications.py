"""Notification API endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pointshare.api.deps import get_current_user, get_db
from pointshare.api.errors import error_response
from pointshare.models.notification import Notification
from pointshare.models.user import User
from pointshare.schemas.notification import NotificationResponse, NotificationUpdate
from pointshare.services.notifications import list_notifications, mark_notification_read
from pointshare.services.results import ErrorKind, ValidationResult
from pointshare.services.validation import validate_notification_update

router = APIRouter(prefix="/notifications", tags=["notifications"])

NOTIFICATION_NOT_FOUND = "Notification not found"


def _to_response(notification: Notification) -> NotificationResponse:
    # read is stored as 0/1
    return NotificationResponse(
        id=notification.id,
        user_id=notification.user_id,
        type=notification.type,
        message=notification.message,
        read=bool(notification.read),
        created_at=notification.created_at,
        updated_at=notification.updated_at,
    )


@router.get("", response_model=list[NotificationResponse])
def get_notifications(
    unread_only: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Notifications for the logged-in user, newest first."""
    return [_to_response(n) for n in list_notifications(db, current_user.id, unread_only=unread_only)]


@router.patch("", response_model=NotificationResponse)
def update_notification(
    update_data: NotificationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = validate_notification_update(update_data.notification_id)
    if not result.valid:
        return error_response(result)

    notification = mark_notification_read(
        db,
        current_user.id,
        update_data.notification_id,
        read=update_data.read,
    )
    if notification is None:
        return error_response(ValidationResult.fail(ErrorKind.NOT_FOUND, NOTIFICATION_NOT_FOUND))
    return _to_response(notification)
