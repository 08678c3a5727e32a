"""Points balance API endpoints."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pointshare.api.deps import get_current_user, get_db
from pointshare.api.errors import error_response
from pointshare.models.user import User
from pointshare.schemas.points import BalanceResponse, BalanceUpdate
from pointshare.services.ledger import get_or_create_balance, set_balance
from pointshare.services.results import INTERNAL_ERROR_MESSAGE, ErrorKind, ValidationResult
from pointshare.services.validation import validate_balance

router = APIRouter(prefix="/points", tags=["points"])
logger = logging.getLogger(__name__)


@router.get("", response_model=BalanceResponse)
def get_points(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the current user's balance, starting at zero on first visit."""
    try:
        balance = get_or_create_balance(db, current_user.id)
        db.commit()
    except SQLAlchemyError:
        logger.exception(f"Error fetching points for user {current_user.id}")
        db.rollback()
        return error_response(ValidationResult.fail(ErrorKind.INTERNAL_FAULT, INTERNAL_ERROR_MESSAGE))
    return BalanceResponse(balance=balance.balance)


@router.post("", response_model=BalanceResponse)
def update_points(
    balance_data: BalanceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Set the current user's balance to match their dining account."""
    result = validate_balance(balance_data.balance)
    if not result.valid:
        return error_response(result)

    try:
        balance = set_balance(db, current_user.id, balance_data.balance)
        db.commit()
    except SQLAlchemyError:
        logger.exception(f"Error updating points for user {current_user.id}")
        db.rollback()
        return error_response(ValidationResult.fail(ErrorKind.INTERNAL_FAULT, INTERNAL_ERROR_MESSAGE))
    return BalanceResponse(balance=balance.balance)
