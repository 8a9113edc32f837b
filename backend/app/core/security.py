from __future__ import annotations

from datetime import datetime, timedelta, timezone
import secrets

from jose import jwt

from app.core.config import get_settings


def create_access_token(subject: str, *, is_admin: bool = True, expires_minutes: int | None = None) -> str:
    settings = get_settings()
    lifetime = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=lifetime)
    payload = {"sub": subject, "is_admin": is_admin, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def authenticate_admin(user_id: str, password: str) -> bool:
    expected = get_settings().admin_credentials().get(user_id)
    if expected is None:
        # Unknown ids still pay for one comparison.
        secrets.compare_digest(password.encode(), b"-")
        return False
    return secrets.compare_digest(password.encode(), expected.encode())
