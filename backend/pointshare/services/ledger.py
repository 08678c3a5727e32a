"""Points ledger: per-user balances and the transfer between them.

This module is the only write path for ``PointsBalance`` rows. None of the
functions commit; they run inside the caller's transaction so that a
transfer and the request status change it pays for land together.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pointshare.models.points import PointsBalance
from pointshare.services.validation import MAX_POINTS, as_whole_number

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Base class for ledger failures."""


class InsufficientPointsError(LedgerError):
    """The debited user no longer holds enough points for the transfer."""

    def __init__(self, user_id: str, amount: int):
        self.user_id = user_id
        self.amount = amount
        super().__init__(f"User {user_id} cannot cover a transfer of {amount} points")


def _find_balance(db: Session, user_id: str) -> PointsBalance | None:
    return db.execute(
        select(PointsBalance).where(PointsBalance.user_id == user_id)
    ).scalar_one_or_none()


def get_or_create_balance(db: Session, user_id: str) -> PointsBalance:
    """Return the user's balance row, creating it with zero points if absent.

    The insert runs in a savepoint. If a concurrent caller created the row
    first, the unique constraint on ``user_id`` rejects ours and we read
    theirs instead.
    """
    existing = _find_balance(db, user_id)
    if existing is not None:
        return existing

    try:
        with db.begin_nested():
            balance = PointsBalance(user_id=user_id, balance=0)
            db.add(balance)
        logger.debug(f"Created points balance for user {user_id}")
        return balance
    except IntegrityError:
        logger.debug(f"Points balance for user {user_id} created concurrently")
        return _find_balance(db, user_id)


def get_balance(db: Session, user_id: str) -> int:
    """Current balance for a user, initialising the row if needed."""
    return get_or_create_balance(db, user_id).balance


def set_balance(db: Session, user_id: str, new_balance: int) -> PointsBalance:
    """Overwrite a user's balance.

    Raises:
        ValueError: if ``new_balance`` is not a whole number between 0 and
            ``MAX_POINTS``.
    """
    amount = as_whole_number(new_balance)
    if amount is None or not 0 <= amount <= MAX_POINTS:
        raise ValueError("Balance must be a non-negative integer")

    balance = get_or_create_balance(db, user_id)
    balance.balance = amount
    db.flush()
    logger.info(f"Set points balance for user {user_id} to {amount}")
    return balance


def transfer(db: Session, from_user_id: str, to_user_id: str, amount: int) -> None:
    """Move ``amount`` points from one user to another.

    Both balance rows must already exist. The debit only applies while the
    sender still holds at least ``amount`` points; otherwise
    :class:`InsufficientPointsError` is raised and the caller is expected to
    roll back its transaction. Rows already loaded in the session keep
    their old values until the transaction ends.
    """
    if amount <= 0:
        raise ValueError("Transfer amount must be positive")

    debited = db.execute(
        update(PointsBalance)
        .where(PointsBalance.user_id == from_user_id, PointsBalance.balance >= amount)
        .values(balance=PointsBalance.balance - amount)
        .execution_options(synchronize_session=False)
    )
    if debited.rowcount != 1:
        raise InsufficientPointsError(from_user_id, amount)

    credited = db.execute(
        update(PointsBalance)
        .where(PointsBalance.user_id == to_user_id)
        .values(balance=PointsBalance.balance + amount)
        .execution_options(synchronize_session=False)
    )
    if credited.rowcount != 1:
        raise LedgerError(f"No points balance for user {to_user_id}")

    logger.info(f"Transferred {amount} points from {from_user_id} to {to_user_id}")

