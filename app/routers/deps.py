from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.errors import AuthRequiredError
from app.db.session import get_db
from app.models.user import User
from app.services.identity import Identity, current_identity


def get_identity(request: Request, db: Session = Depends(get_db)) -> Identity:
    return current_identity(request, db)


def get_current_user(identity: Identity = Depends(get_identity)) -> User:
    if identity.user is None:
        raise AuthRequiredError("Login required")
    return identity.user


def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise AuthRequiredError(admin=True)
    return identity
