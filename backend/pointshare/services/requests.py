"""Request lifecycle: create, delete, accept and decline points requests.

A request starts ``pending`` and either moves to one of the terminal states
``accepted`` or ``declined``, or is deleted by its requester while still
pending. Each operation receives the acting user's id explicitly, owns its
transaction, and returns an :class:`OperationResult` instead of raising for
expected failures.

Status transitions are claimed with an ``UPDATE ... WHERE status = 'pending'``
inside the same transaction as the ledger transfer. When two donors race on
the same request, only one claim matches a row; the other sees zero rows and
is told the request is no longer pending.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from pointshare.models.notification import REQUEST_ACCEPTED, REQUEST_DECLINED
from pointshare.models.request import Request, RequestStatus
from pointshare.models.user import User
from pointshare.services.ledger import InsufficientPointsError, get_or_create_balance, transfer
from pointshare.services.notifications import notify_requester
from pointshare.services.results import INTERNAL_ERROR_MESSAGE, ErrorKind, OperationResult
from pointshare.services.validation import (
    DELETE_NOT_PENDING,
    INSUFFICIENT_BALANCE,
    NOT_PENDING,
    NewRequest,
    validate_accept_request,
    validate_decline_request,
    validate_delete_request,
)

logger = logging.getLogger(__name__)


def _find_request(db: Session, request_id: str) -> Request | None:
    return db.query(Request).filter(Request.id == request_id).first()


def _display_name(db: Session, user_id: str) -> str:
    user = db.get(User, user_id)
    if user is None:
        return "Someone"
    return user.name or user.email


def _claim_pending(db: Session, request_id: str, status: RequestStatus, donor_id: str) -> bool:
    """Move a pending request to ``status``. False if it was no longer pending."""
    claimed = db.query(Request).filter(
        Request.id == request_id,
        Request.status == RequestStatus.PENDING.value,
    ).update(
        {"status": status.value, "donor_id": donor_id},
        synchronize_session=False,
    )
    return claimed == 1


def _internal_fault(db: Session, action: str) -> OperationResult:
    logger.exception(f"Error {action}")
    db.rollback()
    return OperationResult.error(ErrorKind.INTERNAL_FAULT, INTERNAL_ERROR_MESSAGE)


def list_requests(db: Session) -> list[Request]:
    """All requests, newest first, with requester and donor loaded."""
    requests = (
        db.query(Request)
        .options(joinedload(Request.requester), joinedload(Request.donor))
        .order_by(Request.created_at.desc())
        .all()
    )
    logger.debug(f"Fetched {len(requests)} requests")
    return requests


def get_request(db: Session, request_id: str) -> Request | None:
    return _find_request(db, request_id)


def create_request(db: Session, requester_id: str, new_request: NewRequest) -> OperationResult[Request]:
    """Persist a new pending request for ``requester_id``."""
    request = Request(
        requester_id=requester_id,
        location=new_request.location,
        points_requested=new_request.points_requested,
        message=new_request.message,
        status=RequestStatus.PENDING.value,
    )
    try:
        db.add(request)
        db.commit()
        db.refresh(request)
    except SQLAlchemyError:
        return _internal_fault(db, "creating request")

    logger.info(
        f"User {requester_id} requested {request.points_requested} points at {request.location} ({request.id})"
    )
    return OperationResult.success(request)


def delete_request(db: Session, request_id: str, acting_user_id: str) -> OperationResult[None]:
    """Remove a pending request. Only its requester may do this."""
    try:
        request = _find_request(db, request_id)
        result = validate_delete_request(request, acting_user_id)
        if not result.valid:
            logger.debug(f"Delete of request {request_id} by {acting_user_id} rejected: {result.error}")
            return OperationResult.rejected(result)

        deleted = db.query(Request).filter(
            Request.id == request_id,
            Request.status == RequestStatus.PENDING.value,
        ).delete(synchronize_session=False)
        if deleted != 1:
            db.rollback()
            # Accepted, declined or deleted since it was loaded.
            current = _find_request(db, request_id)
            result = validate_delete_request(current, acting_user_id)
            if result.valid:
                return OperationResult.error(ErrorKind.INVALID_STATE, DELETE_NOT_PENDING)
            return OperationResult.rejected(result)

        db.commit()
    except SQLAlchemyError:
        return _internal_fault(db, f"deleting request {request_id}")

    logger.info(f"User {acting_user_id} deleted request {request_id}")
    return OperationResult.success(None)


def accept_request(db: Session, request_id: str, acting_user_id: str) -> OperationResult[Request]:
    """Accept a request: pay the requester from the donor's balance.

    The status change, the debit, the credit and the requester's
    notification commit together or not at all.
    """
    try:
        request = _find_request(db, request_id)
        donor_balance = get_or_create_balance(db, acting_user_id)
        result = validate_accept_request(request, acting_user_id, donor_balance.balance)
        if not result.valid:
            db.rollback()
            logger.debug(f"Accept of request {request_id} by {acting_user_id} rejected: {result.error}")
            return OperationResult.rejected(result)

        requester_id = request.requester_id
        amount = request.points_requested
        get_or_create_balance(db, requester_id)

        if not _claim_pending(db, request_id, RequestStatus.ACCEPTED, acting_user_id):
            db.rollback()
            logger.info(f"Request {request_id} was resolved before {acting_user_id} could accept it")
            return OperationResult.error(ErrorKind.INVALID_STATE, NOT_PENDING)

        transfer(db, acting_user_id, requester_id, amount)
        notify_requester(db, request, _display_name(db, acting_user_id), REQUEST_ACCEPTED)
        db.commit()
    except InsufficientPointsError:
        db.rollback()
        logger.info(f"User {acting_user_id} no longer has enough points for request {request_id}")
        return OperationResult.error(ErrorKind.INSUFFICIENT_RESOURCE, INSUFFICIENT_BALANCE)
    except SQLAlchemyError:
        return _internal_fault(db, f"accepting request {request_id}")

    db.refresh(request)
    logger.info(f"User {acting_user_id} accepted request {request_id}: {amount} points to {requester_id}")
    return OperationResult.success(request)


def decline_request(db: Session, request_id: str, acting_user_id: str) -> OperationResult[Request]:
    """Decline a request. Balances are untouched."""
    try:
        request = _find_request(db, request_id)
        result = validate_decline_request(request, acting_user_id)
        if not result.valid:
            logger.debug(f"Decline of request {request_id} by {acting_user_id} rejected: {result.error}")
            return OperationResult.rejected(result)

        if not _claim_pending(db, request_id, RequestStatus.DECLINED, acting_user_id):
            db.rollback()
            return OperationResult.error(ErrorKind.INVALID_STATE, NOT_PENDING)

        notify_requester(db, request, _display_name(db, acting_user_id), REQUEST_DECLINED)
        db.commit()
    except SQLAlchemyError:
        return _internal_fault(db, f"declining request {request_id}")

    db.refresh(request)
    logger.info(f"User {acting_user_id} declined request {request_id}")
    return OperationResult.success(request)
