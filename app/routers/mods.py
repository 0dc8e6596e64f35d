from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import AuthRequiredError
from app.db.session import get_db
from app.routers.deps import get_identity, require_admin
from app.schemas.auth import SuccessResponse
from app.schemas.mod import ModCreateResponse, ModRead, ModWrite, RateRequest, RateResponse
from app.services import catalog
from app.services.identity import Identity

router = APIRouter(prefix="/api/mods", tags=["mods"])


@router.get("", response_model=list[ModRead])
def list_mods(db: Session = Depends(get_db)) -> list[ModRead]:
    return [catalog.serialize_mod(mod) for mod in catalog.list_mods(db)]


@router.get("/{mod_id}", response_model=ModRead)
def get_mod(mod_id: int, db: Session = Depends(get_db)) -> ModRead:
    return catalog.serialize_mod(catalog.get_mod(db, mod_id))


@router.post("", response_model=ModCreateResponse)
def create_mod(
    payload: ModWrite,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_admin),
) -> ModCreateResponse:
    mod = catalog.create_mod(db, payload, author=identity.user)
    return ModCreateResponse(id=mod.id)


@router.put("/{mod_id}", response_model=SuccessResponse)
def update_mod(
    mod_id: int,
    payload: ModWrite,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_admin),
) -> SuccessResponse:
    catalog.update_mod(db, mod_id, payload)
    return SuccessResponse()


@router.delete("/{mod_id}", response_model=SuccessResponse)
def delete_mod(
    mod_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_admin),
) -> SuccessResponse:
    catalog.delete_mod(db, mod_id)
    return SuccessResponse()


@router.post("/{mod_id}/rate", response_model=RateResponse)
def rate_mod(
    mod_id: int,
    payload: RateRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> RateResponse:
    if identity.user is None:
        raise AuthRequiredError("Login required to rate")
    new_rating = catalog.rate_mod(db, mod_id, identity.user, payload.score)
    return RateResponse(newRating=new_rating)
