"""Bearer token creation and decoding."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt

from messledger.config import Settings, get_settings


def create_access_token(
    subject: str,
    role: str,
    name: str = "",
    settings: Optional[Settings] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed token for a member key (or 'admin')."""
    settings = settings or get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    payload = {
        "sub": subject,
        "role": role,
        "name": name,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> dict[str, Any]:
    """Decode and verify a token.

    Raises:
        jose.JWTError: If the signature is invalid or the token expired
    """
    settings = settings or get_settings()
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
