"""Shared FastAPI dependencies."""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from pointshare.config import get_settings
from pointshare.database import get_db
from pointshare.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

__all__ = ["get_current_user", "get_db"]


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer access token to a user, or reject with 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized()

    settings = get_settings()
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
    except JWTError:
        logger.debug("Rejected invalid or expired access token")
        raise _unauthorized()

    if payload.get("type") != "access":
        raise _unauthorized()

    user_id: str | None = payload.get("sub")
    if user_id is None:
        raise _unauthorized()

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise _unauthorized()

    return user
