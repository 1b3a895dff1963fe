"""JWT helpers for the bearer-token gate on mutating routes."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from .config import settings


def create_token(subject: str, expires_delta: timedelta, token_type: str) -> str:
    """Create a signed JWT for the given subject and token type."""
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": subject,
        "type": token_type,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(subject: str) -> str:
    """Create an access token with the configured TTL."""
    delta = timedelta(minutes=settings.access_token_expires_minutes)
    return create_token(subject, delta, "access")


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode a JWT and return its payload if valid."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def is_admin_subject(subject: str) -> bool:
    """Return True if the subject may mutate gallery data.

    An empty allowlist admits every authenticated subject.
    """
    if not settings.admin_subjects:
        return True
    return subject in settings.admin_subjects
