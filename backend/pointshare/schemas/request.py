"""Points request schemas."""
from typing import Any

from pydantic import BaseModel


class RequestCreate(BaseModel):
    """Request to ask other users for points.

    Fields are deliberately loose; the validation rules decide what counts as
    a usable location and point amount so that the error messages are the
    ones the front-end expects.
    """

    location: Any = None
    points_requested: Any = None
    message: Any = None


class UserSummary(BaseModel):
    """Public identity of a requester or donor."""

    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class RequestResponse(BaseModel):
    """Points request response."""

    id: str
    requester_id: str
    donor_id: str | None
    location: str
    points_requested: int
    message: str | None
    status: str
    created_at: str
    updated_at: str
    requester: UserSummary
    donor: UserSummary | None = None

    class Config:
        from_attributes = True


class SuccessResponse(BaseModel):
    """Acknowledgement for delete, accept and decline."""

    success: bool = True
