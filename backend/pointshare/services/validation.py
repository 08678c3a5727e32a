"""Validation rules for points requests.

Every rule is a pure function: it takes already-loaded data (or raw inbound
values) and returns a :class:`ValidationResult`. Nothing here touches the
database, so the rules can be exercised without a live store.

Check order is significant. A caller cannot learn the owner or status of a
request that does not exist, so "not found" is always reported first.
"""
from dataclasses import dataclass
from typing import Any, Protocol

from pointshare.models.request import RequestStatus
from pointshare.services.results import ErrorKind, ValidationResult

LOCATION_REQUIRED = "Location is required"
POINTS_INVALID = "Points requested must be a positive integer"
REQUEST_NOT_FOUND = "Request not found"
DELETE_NOT_OWNER = "You can only delete your own requests"
DELETE_NOT_PENDING = "You can only delete pending requests"
ACCEPT_OWN_REQUEST = "You cannot accept your own request"
DECLINE_OWN_REQUEST = "You cannot decline your own request"
NOT_PENDING = "Request is no longer pending"
INSUFFICIENT_BALANCE = "Insufficient points balance"
BALANCE_INVALID = "Balance must be a non-negative integer"
NOTIFICATION_ID_REQUIRED = "Notification ID is required"

# Largest value the INTEGER points columns hold on every backend.
MAX_POINTS = 2**31 - 1


class RequestLike(Protocol):
    requester_id: str
    status: str
    points_requested: int


@dataclass(frozen=True)
class NewRequest:
    """Inbound request data that has passed :func:`validate_create_request`."""

    location: str
    points_requested: int
    message: str | None = None


def as_whole_number(value: Any) -> int | None:
    """Return ``value`` as an int if it is a whole number, else None.

    Only real numbers qualify: booleans and numeric strings are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def validate_create_request(location: Any, points_requested: Any) -> ValidationResult:
    """Validate the fields of a new request."""
    if not location or not isinstance(location, str) or not location.strip():
        return ValidationResult.fail(ErrorKind.INVALID_INPUT, LOCATION_REQUIRED)

    points = as_whole_number(points_requested)
    if points is None or not 0 < points <= MAX_POINTS:
        return ValidationResult.fail(ErrorKind.INVALID_INPUT, POINTS_INVALID)

    return ValidationResult.ok()


def parse_new_request(
    location: Any,
    points_requested: Any,
    message: Any = None,
) -> NewRequest | ValidationResult:
    """Turn raw inbound values into a :class:`NewRequest`.

    Returns the failing :class:`ValidationResult` when the input is invalid.
    A message that is not a string, or is blank, is dropped.
    """
    result = validate_create_request(location, points_requested)
    if not result.valid:
        return result

    cleaned_message = message.strip() if isinstance(message, str) else ""
    return NewRequest(
        location=location.strip(),
        points_requested=as_whole_number(points_requested),
        message=cleaned_message or None,
    )


def validate_delete_request(request: RequestLike | None, user_id: str) -> ValidationResult:
    """Only the requester may delete, and only while the request is pending."""
    if request is None:
        return ValidationResult.fail(ErrorKind.NOT_FOUND, REQUEST_NOT_FOUND)

    if request.requester_id != user_id:
        return ValidationResult.fail(ErrorKind.FORBIDDEN, DELETE_NOT_OWNER)

    if request.status != RequestStatus.PENDING:
        return ValidationResult.fail(ErrorKind.INVALID_STATE, DELETE_NOT_PENDING)

    return ValidationResult.ok()


def validate_accept_request(
    request: RequestLike | None,
    user_id: str,
    donor_balance: int,
) -> ValidationResult:
    """Check existence, self-accept, pending status, then balance, in that order."""
    if request is None:
        return ValidationResult.fail(ErrorKind.NOT_FOUND, REQUEST_NOT_FOUND)

    if request.requester_id == user_id:
        return ValidationResult.fail(ErrorKind.INVALID_INPUT, ACCEPT_OWN_REQUEST)

    if request.status != RequestStatus.PENDING:
        return ValidationResult.fail(ErrorKind.INVALID_STATE, NOT_PENDING)

    # An exact match is enough; no surplus is required.
    if donor_balance < request.points_requested:
        return ValidationResult.fail(ErrorKind.INSUFFICIENT_RESOURCE, INSUFFICIENT_BALANCE)

    return ValidationResult.ok()


def validate_decline_request(request: RequestLike | None, user_id: str) -> ValidationResult:
    if request is None:
        return ValidationResult.fail(ErrorKind.NOT_FOUND, REQUEST_NOT_FOUND)

    if request.requester_id == user_id:
        return ValidationResult.fail(ErrorKind.INVALID_INPUT, DECLINE_OWN_REQUEST)

    if request.status != RequestStatus.PENDING:
        return ValidationResult.fail(ErrorKind.INVALID_STATE, NOT_PENDING)

    return ValidationResult.ok()


def validate_balance(balance: Any) -> ValidationResult:
    """Validate a balance a user sets for themselves."""
    amount = as_whole_number(balance)
    if amount is None or not 0 <= amount <= MAX_POINTS:
        return ValidationResult.fail(ErrorKind.INVALID_INPUT, BALANCE_INVALID)
    return ValidationResult.ok()


def validate_notification_update(notification_id: Any) -> ValidationResult:
    if not notification_id or not isinstance(notification_id, str):
        return ValidationResult.fail(ErrorKind.INVALID_INPUT, NOTIFICATION_ID_REQUIRED)
    return ValidationResult.ok()
