# /promptforge/core/deps.py

"""
Request-level dependencies shared by the routers.

Sign-in lives outside this service. An upstream gateway authenticates the
caller and forwards the verified address in the `X-User-Email` header; this
module only resolves that address to a stored user.
"""

from typing import Optional
from fastapi import Depends, Header, HTTPException, status

from ..db.models.project_models import User
from ..services.database_service import DatabaseService, get_db_service


def get_current_active_user(
    x_user_email: Optional[str] = Header(None),
    db: DatabaseService = Depends(get_db_service)
) -> User:
    if not x_user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    user = db.get_user_by_email(x_user_email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
