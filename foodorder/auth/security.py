from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from foodorder.core.errors import InvalidTokenError


_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
_JWT_ALG = "HS256"


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of ``password`` against a stored hash."""
    if not password or not password_hash:
        return False
    try:
        return _pwd.verify(password, password_hash)
    except (ValueError, TypeError):
        # Unrecognized or corrupted hash
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verify when there is no user to check."""
    _pwd.dummy_verify()


def issue_token(*, secret: str, user_id: int, expires_days: int = 3) -> str:
    if not secret:
        raise ValueError("jwt_secret_blank")

    now = datetime.now(timezone.utc)
    exp = now + timedelta(days=max(1, int(expires_days)))

    payload: Dict[str, Any] = {
        "id": int(user_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=_JWT_ALG)


def verify_token(*, token: str, secret: str) -> Dict[str, Any]:
    """Decode a session token, returning ``{"id": <user id>}``.

    Raises InvalidTokenError on a bad signature, expiry or a malformed payload.
    """
    if not token:
        raise InvalidTokenError("missing_token")
    if not secret:
        raise ValueError("jwt_secret_blank")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[_JWT_ALG],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("token_expired")
    except jwt.InvalidTokenError:
        raise InvalidTokenError("token_invalid")

    user_id = payload.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise InvalidTokenError("token_id_not_int")
    return {"id": user_id}
