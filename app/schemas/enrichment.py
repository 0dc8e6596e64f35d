from pydantic import BaseModel, Field


class DescribeRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)


class SpeechRequest(BaseModel):
    text: str = Field(min_length=1, max_length=5000)


class TextResult(BaseModel):
    text: str | None
    available: bool


class SpeechResult(BaseModel):
    audio_url: str | None
    available: bool
