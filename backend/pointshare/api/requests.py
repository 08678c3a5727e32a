"""Points request API endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pointshare.api.deps import get_current_user, get_db
from pointshare.api.errors import error_response
from pointshare.models.user import User
from pointshare.schemas.request import RequestCreate, RequestResponse, SuccessResponse
from pointshare.services import requests as lifecycle
from pointshare.services.validation import NewRequest, parse_new_request

router = APIRouter(prefix="/requests", tags=["requests"])


@router.get("", response_model=list[RequestResponse])
def list_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List every request, newest first."""
    return lifecycle.list_requests(db)


@router.post("", response_model=RequestResponse, status_code=status.HTTP_201_CREATED)
def create_request(
    request_data: RequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Ask other users for points."""
    parsed = parse_new_request(
        request_data.location,
        request_data.points_requested,
        request_data.message,
    )
    if not isinstance(parsed, NewRequest):
        return error_response(parsed)

    result = lifecycle.create_request(db, current_user.id, parsed)
    if not result.ok:
        return error_response(result.failure)
    return result.value


@router.delete("/{request_id}", response_model=SuccessResponse)
def delete_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete one of your own pending requests."""
    result = lifecycle.delete_request(db, request_id, current_user.id)
    if not result.ok:
        return error_response(result.failure)
    return SuccessResponse()


@router.post("/{request_id}/accept", response_model=SuccessResponse)
def accept_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Give the requested points to the requester."""
    result = lifecycle.accept_request(db, request_id, current_user.id)
    if not result.ok:
        return error_response(result.failure)
    return SuccessResponse()


@router.post("/{request_id}/decline", response_model=SuccessResponse)
def decline_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Turn a request down."""
    result = lifecycle.decline_request(db, request_id, current_user.id)
    if not result.ok:
        return error_response(result.failure)
    return SuccessResponse()
