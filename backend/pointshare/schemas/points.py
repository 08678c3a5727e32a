"""Points balance schemas."""
from typing import Any

from pydantic import BaseModel


class BalanceUpdate(BaseModel):
    """Request to overwrite the current user's balance."""

    balance: Any = None


class BalanceResponse(BaseModel):
    """Current user's balance."""

    balance: int
