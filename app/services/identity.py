"""Google sign-in, cookie sessions and the shared-secret admin capability.

Sessions are stateless: the ``user_id`` and ``admin_session`` cookies hold
signed tokens (see ``app.core.security``) and identity is derived from the
request cookies alone.
"""

import logging
import time
from dataclasses import dataclass
from urllib.parse import quote

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import OAuth2Client
from authlib.jose import JsonWebKey, jwt
from fastapi import Request, Response
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.errors import AuthError
from app.core.security import (
    ADMIN_TOKEN,
    USER_TOKEN,
    create_session_token,
    decode_session_token,
    verify_admin_password,
)
from app.models.user import User

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
GOOGLE_JWKS_URI = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ["https://accounts.google.com", "accounts.google.com"]
OAUTH_SCOPE = "openid email profile"

USER_COOKIE = "user_id"
USER_NAME_COOKIE = "user_name"
ADMIN_COOKIE = "admin_session"
IDENTITY_COOKIES = (USER_COOKIE, USER_NAME_COOKIE, ADMIN_COOKIE)

HTTP_TIMEOUT_SECONDS = 10.0
JWKS_CACHE_SECONDS = 3600

_google_jwks: dict | None = None
_google_jwks_fetched_at = 0.0


@dataclass
class Identity:
    user: User | None = None
    is_admin: bool = False


def _oauth_client() -> OAuth2Client:
    settings = get_settings()
    return OAuth2Client(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        redirect_uri=settings.oauth_redirect_uri,
        scope=OAUTH_SCOPE,
        timeout=HTTP_TIMEOUT_SECONDS,
    )


def begin_login() -> str:
    """Return the Google consent URL (offline access, consent always prompted)."""
    if not get_settings().google_client_id:
        raise AuthError("Google OAuth not configured")
    with _oauth_client() as client:
        url, _state = client.create_authorization_url(
            GOOGLE_AUTHORIZATION_ENDPOINT,
            access_type="offline",
            prompt="consent",
        )
    return url


def _get_google_jwks() -> dict:
    """Fetch and cache Google's signing keys; refreshed hourly to follow key rotation."""
    global _google_jwks, _google_jwks_fetched_at
    now = time.monotonic()
    if _google_jwks is None or now - _google_jwks_fetched_at > JWKS_CACHE_SECONDS:
        response = httpx.get(GOOGLE_JWKS_URI, timeout=HTTP_TIMEOUT_SECONDS)
        response.raise_for_status()
        _google_jwks = response.json()
        _google_jwks_fetched_at = now
    return _google_jwks


def _verify_id_token(id_token: str) -> dict:
    key_set = JsonWebKey.import_key_set(_get_google_jwks())
    claims = jwt.decode(
        id_token,
        key_set,
        claims_options={
            "iss": {"essential": True, "values": GOOGLE_ISSUERS},
            "aud": {"essential": True, "value": get_settings().google_client_id},
            "sub": {"essential": True},
        },
    )
    claims.validate()
    return dict(claims)


def exchange_code(code: str) -> dict:
    """Trade an authorization code for verified ID token claims."""
    with _oauth_client() as client:
        token = client.fetch_token(GOOGLE_TOKEN_ENDPOINT, code=code)
    id_token = token.get("id_token")
    if not id_token:
        raise ValueError("Token response did not include an id_token")
    return _verify_id_token(id_token)


def upsert_user(db: Session, claims: dict) -> User:
    google_id = str(claims["sub"])
    user = db.scalar(select(User).where(User.google_id == google_id))
    try:
        if user is None:
            user = User(
                google_id=google_id,
                email=claims.get("email"),
                name=claims.get("name"),
                picture=claims.get("picture"),
            )
            db.add(user)
            db.commit()
            logger.info("user_created", extra={"user_id": user.id})
        else:
            user.email = claims.get("email", user.email)
            user.name = claims.get("name", user.name)
            user.picture = claims.get("picture", user.picture)
            db.add(user)
            db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise AuthError("Email is already linked to another account") from exc
    return user


def complete_login(db: Session, code: str | None) -> User:
    if not code:
        raise AuthError("No code provided")
    if not get_settings().google_client_id:
        raise AuthError("Google OAuth not configured")
    try:
        claims = exchange_code(code)
    except (AuthlibBaseError, httpx.HTTPError, KeyError, ValueError) as exc:
        logger.warning("oauth_exchange_failed", extra={"error": str(exc)})
        raise AuthError() from exc
    return upsert_user(db, claims)


def _set_cookie(response: Response, key: str, value: str, *, httponly: bool) -> None:
    settings = get_settings()
    response.set_cookie(
        key,
        value,
        httponly=httponly,
        secure=settings.cookie_secure,
        samesite="none" if settings.cookie_secure else "lax",
        max_age=settings.session_max_age_days * 86400,
        path="/",
    )


def start_user_session(response: Response, user: User) -> None:
    _set_cookie(response, USER_COOKIE, create_session_token(str(user.id), USER_TOKEN), httponly=True)
    _set_cookie(response, USER_NAME_COOKIE, quote(user.name or "", safe=""), httponly=False)
    if user.is_admin:
        start_admin_session(response)


def start_admin_session(response: Response) -> None:
    _set_cookie(response, ADMIN_COOKIE, create_session_token("admin", ADMIN_TOKEN), httponly=True)


def admin_login(response: Response, password: str) -> bool:
    if not verify_admin_password(password):
        logger.warning("admin_login_failed")
        return False
    start_admin_session(response)
    return True


def current_identity(request: Request, db: Session) -> Identity:
    identity = Identity()

    token = request.cookies.get(USER_COOKIE)
    if token:
        try:
            claims = decode_session_token(token, USER_TOKEN)
            identity.user = db.get(User, int(claims["sub"]))
        except (ValueError, KeyError, TypeError):
            identity.user = None

    admin_token = request.cookies.get(ADMIN_COOKIE)
    if admin_token:
        try:
            decode_session_token(admin_token, ADMIN_TOKEN)
            identity.is_admin = True
        except ValueError:
            identity.is_admin = False
    return identity


def logout(response: Response) -> None:
    for key in IDENTITY_COOKIES:
        response.delete_cookie(key, path="/")
