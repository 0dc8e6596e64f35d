import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.orm import Session

from app.core.errors import AuthError, InvalidCredentialsError
from app.db.session import get_db
from app.routers.deps import get_identity
from app.schemas.auth import AdminLoginRequest, AuthUrlResponse, MeResponse, SuccessResponse, UserRead
from app.services import identity as identity_service
from app.services.identity import Identity

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)

CALLBACK_PAGE = """<html>
  <body>
    <script>
      if (window.opener) {
        window.opener.postMessage({ type: 'OAUTH_AUTH_SUCCESS' }, '*');
        window.close();
      } else {
        window.location.href = '/';
      }
    </script>
    <p>Authentication successful. This window should close automatically.</p>
  </body>
</html>
"""


@router.get("/api/auth/url", response_model=AuthUrlResponse)
def get_auth_url() -> AuthUrlResponse:
    return AuthUrlResponse(url=identity_service.begin_login())


@router.get("/auth/callback", response_class=HTMLResponse)
def auth_callback(code: str | None = Query(default=None), db: Session = Depends(get_db)) -> HTMLResponse:
    if not code:
        return HTMLResponse("No code provided", status_code=status.HTTP_400_BAD_REQUEST)
    try:
        user = identity_service.complete_login(db, code)
    except AuthError:
        logger.exception("oauth_callback_failed")
        return HTMLResponse("Authentication failed", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = HTMLResponse(CALLBACK_PAGE)
    identity_service.start_user_session(response, user)
    logger.info("user_logged_in", extra={"user_id": user.id})
    return response


@router.post("/api/admin/login", response_model=SuccessResponse)
def admin_login(payload: AdminLoginRequest) -> JSONResponse:
    response = JSONResponse({"success": True})
    if not identity_service.admin_login(response, payload.password):
        raise InvalidCredentialsError()
    return response


@router.post("/api/auth/logout", response_model=SuccessResponse)
def logout() -> JSONResponse:
    response = JSONResponse({"success": True})
    identity_service.logout(response)
    return response


@router.get("/api/me", response_model=MeResponse)
def get_me(identity: Identity = Depends(get_identity)) -> MeResponse:
    user = UserRead.model_validate(identity.user) if identity.user else None
    return MeResponse(user=user, isAdmin=identity.is_admin)
