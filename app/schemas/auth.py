from datetime import datetime

from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    password: str = ""


class AuthUrlResponse(BaseModel):
    url: str


class UserRead(BaseModel):
    id: int
    google_id: str
    email: str | None
    name: str | None
    picture: str | None
    is_admin: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MeResponse(BaseModel):
    user: UserRead | None
    isAdmin: bool


class SuccessResponse(BaseModel):
    success: bool = True
