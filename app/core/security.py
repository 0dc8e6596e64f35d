import hmac
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.core.config import get_settings

USER_TOKEN = "user"
ADMIN_TOKEN = "admin"


def create_session_token(subject: str, kind: str, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.session_max_age_days))
    payload = {"sub": subject, "kind": kind, "exp": expire}
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str, kind: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
    if claims.get("kind") != kind:
        raise ValueError("Unexpected token kind")
    return claims


def verify_admin_password(password: str) -> bool:
    expected = get_settings().admin_password
    if not expected or not password:
        return False
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))
