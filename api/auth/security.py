"""
Password hashing and admin session tokens.

Tokens carry the claims the club's admin dashboard reads: `id`, `email`,
`iat` and `exp` (one hour by default). bcrypt only looks at the first 72
bytes of a password, so longer passwords are refused instead of being
silently truncated.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any

import bcrypt
import jwt

BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_TOKEN_LIFETIME_MIN = 60
_DEV_SECRET = "dev-change-this-secret"


class AuthSecurityError(RuntimeError):
    pass


@dataclass(frozen=True)
class TokenSettings:
    secret: str
    algorithm: str = "HS256"
    lifetime_s: int = DEFAULT_TOKEN_LIFETIME_MIN * 60

    @classmethod
    def from_env(cls) -> "TokenSettings":
        raw_minutes = os.environ.get("ACCESS_TOKEN_EXPIRE_MIN", "").strip()
        try:
            minutes = int(raw_minutes) if raw_minutes else DEFAULT_TOKEN_LIFETIME_MIN
        except ValueError:
            minutes = DEFAULT_TOKEN_LIFETIME_MIN
        if minutes <= 0:
            minutes = DEFAULT_TOKEN_LIFETIME_MIN

        return cls(
            # Set JWT_SECRET in production.
            secret=os.environ.get("JWT_SECRET", "").strip() or _DEV_SECRET,
            algorithm=os.environ.get("JWT_ALG", "").strip() or "HS256",
            lifetime_s=minutes * 60,
        )


def _password_bytes(plain_password: str) -> bytes:
    return (plain_password or "").encode("utf-8")


def password_fits_bcrypt(plain_password: str) -> bool:
    return len(_password_bytes(plain_password)) <= BCRYPT_MAX_PASSWORD_BYTES


def hash_password(plain_password: str) -> str:
    password = _password_bytes(plain_password)
    if not password:
        raise AuthSecurityError("Password is empty.")
    if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
        raise AuthSecurityError(f"Password is longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = _password_bytes(plain_password)
    hashed = (password_hash or "").encode("utf-8")
    # An over-long password can never have been stored.
    if not password or not hashed or len(password) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def issue_admin_token(
    *,
    admin_id: str,
    email: str,
    settings: TokenSettings | None = None,
    now: int | None = None,
) -> str:
    settings = settings or TokenSettings.from_env()
    issued_at = int(time.time()) if now is None else now
    claims = {
        "id": admin_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + settings.lifetime_s,
    }
    return jwt.encode(claims, settings.secret, algorithm=settings.algorithm)


def read_admin_token(token: str, *, settings: TokenSettings | None = None) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims. Raises AuthSecurityError.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    settings = settings or TokenSettings.from_env()
    try:
        claims = jwt.decode(
            raw,
            settings.secret,
            algorithms=[settings.algorithm],
            options={"require": ["id", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    return claims
