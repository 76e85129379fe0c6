"""Auth gate: resolves the calling user before write operations run."""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from jobpool.db import User, get_db
from jobpool.errors import UnauthorizedError


def get_current_user(
    x_user_id: str | None = Header(None, alias="X-User-ID"),
    db: Session = Depends(get_db),
) -> User:
    """Return the user named by the X-User-ID header.

    Raises UnauthorizedError when the header is missing or unknown.
    """
    if not x_user_id:
        raise UnauthorizedError("Not authorized, no user identity provided")
    user = db.query(User).filter(User.id == x_user_id).first()
    if not user:
        raise UnauthorizedError("Not authorized, user not found")
    return user
