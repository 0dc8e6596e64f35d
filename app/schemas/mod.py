from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ModWrite(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    icon_url: str | None = Field(default=None, max_length=1000)
    size: str | None = Field(default=None, max_length=64)
    screenshots: list[str] | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value

    @field_validator("screenshots")
    @classmethod
    def screenshots_not_blank(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        cleaned = [url.strip() for url in value]
        if any(not url for url in cleaned):
            raise ValueError("screenshot urls must not be blank")
        return cleaned


class ModRead(BaseModel):
    id: int
    title: str
    description: str | None
    icon_url: str | None
    size: str | None
    rating: float
    author_id: int | None
    author_name: str | None
    created_at: datetime
    screenshots: list[str]


class ModCreateResponse(BaseModel):
    id: int


class RateRequest(BaseModel):
    score: int = Field(ge=1, le=5, strict=True)


class RateResponse(BaseModel):
    success: bool = True
    newRating: float
