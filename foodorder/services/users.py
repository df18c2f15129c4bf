"""
Credential Store

Persists users with hashed passwords and a role. All email lookups go
through ``normalize_email`` so ``Jane@Example.com`` and
``jane@example.com`` are the same account.
"""

from __future__ import annotations

import logging
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.auth.security import dummy_verify, hash_password, verify_password
from foodorder.core.errors import DuplicateError, InvalidCredentialsError, ValidationError
from foodorder.models import Role, User

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD_MIN_LENGTH = 6


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def check_email(email: str) -> str:
    """Return the normalized address or raise ValidationError."""
    normalized = normalize_email(email)
    if not normalized:
        raise ValidationError("Please enter an email")
    try:
        validate_email(normalized, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("Please enter a valid email", detail=str(e))
    return normalized


class UserStore:
    """User persistence bound to one database session."""

    def __init__(self, session: AsyncSession, password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH):
        self.session = session
        self.password_min_length = password_min_length

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, int(user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        result = await self.session.execute(select(User).where(User.email == normalized))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: Role | str = Role.USER,
    ) -> User:
        if not (name or "").strip():
            raise ValidationError("Please enter a name")
        normalized = check_email(email)
        if len(password or "") < self.password_min_length:
            raise ValidationError(
                f"Minimum password length is {self.password_min_length} characters"
            )
        try:
            role = Role.parse(role)
        except ValueError as e:
            raise ValidationError(str(e))

        if await self.find_by_email(normalized) is not None:
            raise DuplicateError("That email is already registered")

        user = User(
            name=name,
            email=normalized,
            password=hash_password(password),
            role=role,
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            await self.session.rollback()
            raise DuplicateError("That email is already registered")
        await self.session.refresh(user)

        logger.info(f"User #{user.id} created ({user.role.value})")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user whose stored hash matches ``password``.

        Unknown email and wrong password fail with the same error.
        """
        user = await self.find_by_email(email)
        if user is None:
            dummy_verify()
            raise InvalidCredentialsError()
        if not verify_password(password, user.password):
            raise InvalidCredentialsError()
        return user

    async def ensure_admin(self, name: str, email: str, password: str) -> User:
        """Create an Admin account, or promote the existing one with that email."""
        user = await self.find_by_email(email)
        if user is None:
            return await self.create_user(name, email, password, role=Role.ADMIN)

        if user.role != Role.ADMIN:
            user.role = Role.ADMIN
            await self.session.commit()
            await self.session.refresh(user)
            logger.info(f"User #{user.id} promoted to Admin")
        return user
