from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.core.config import Settings
from foodorder.core.errors import AuthenticationError, AuthorizationError, InvalidTokenError
from foodorder.database import get_db
from foodorder.models import User
from foodorder.services.users import UserStore

from .security import verify_token

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def _resolve_user(request: Request, db: AsyncSession) -> User:
    """Turn the session cookie into a user, or raise AuthenticationError."""
    settings = get_app_settings(request)

    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise AuthenticationError("Please log in to continue", detail="missing_token")

    try:
        claims = verify_token(token=token, secret=settings.jwt_secret)
    except InvalidTokenError as e:
        logger.debug(f"Rejected session token: {e.message}")
        raise AuthenticationError("Please log in to continue", detail=e.message)

    user = await UserStore(db).get_by_id(claims["id"])
    if user is None:
        raise AuthenticationError("Please log in to continue", detail="user_not_found")
    return user


async def attach_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Attach the session's user to ``request.state.user`` if there is one.

    Never rejects: anonymous requests get ``None``.
    """
    try:
        user: Optional[User] = await _resolve_user(request, db)
    except AuthenticationError:
        user = None
    request.state.user = user
    return user


async def require_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """401 unless the request carries a valid session for an existing user."""
    user = await _resolve_user(request, db)
    request.state.user = user
    return user


async def require_admin(
    request: Request,
    _: User = Depends(require_auth),
) -> User:
    """403 unless the user resolved earlier in this request is an Admin.

    Reads the user ``require_auth`` attached; the token is not checked again.
    """
    user: Optional[User] = getattr(request.state, "user", None)
    if user is None:
        raise AuthenticationError("Please log in to continue")
    if not user.is_admin:
        logger.info(f"User #{user.id} denied admin route {request.url.path}")
        raise AuthorizationError("Admin access required")
    return user
