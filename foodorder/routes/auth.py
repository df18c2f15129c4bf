"""
Account Endpoints

    POST /signup  create an account
    POST /login   verify credentials, set the session cookie
    GET  /logout  clear the session cookie
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.auth.deps import get_app_settings
from foodorder.auth.security import issue_token
from foodorder.core.config import Settings
from foodorder.database import get_db
from foodorder.schemas import (
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserEnvelope,
    UserResponse,
)
from foodorder.services.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def get_user_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> UserStore:
    return UserStore(db, password_min_length=settings.password_min_length)


@router.post(
    "/signup",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create Account",
)
async def signup(
    body: SignupRequest,
    store: UserStore = Depends(get_user_store),
) -> UserEnvelope:
    user = await store.create_user(body.name, body.email, body.password)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=UserEnvelope,
    responses={400: {"model": ErrorResponse}},
    summary="Log In",
)
async def login(
    body: LoginRequest,
    response: Response,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
) -> UserEnvelope:
    """
    Verify the credentials and start a session.

    The session token is returned only as an httpOnly cookie. Unknown
    email and wrong password produce the same 400.
    """
    user = await store.authenticate(body.email, body.password)

    token = issue_token(
        secret=settings.jwt_secret,
        user_id=user.id,
        expires_days=settings.jwt_expires_days,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )

    logger.info(f"User #{user.id} logged in")
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get(
    "/logout",
    response_model=MessageResponse,
    summary="Log Out",
)
async def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """Clear the session cookie, whether or not one was sent."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Logged out")
