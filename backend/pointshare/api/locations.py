"""Dining locations API endpoint."""
from fastapi import APIRouter

from pointshare.services.locations import get_locations

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=list[str])
def list_locations():
    """Get the dining locations offered on the request form (no auth required)."""
    return get_locations()
