from app.schemas.auth import AdminLoginRequest, AuthUrlResponse, MeResponse, SuccessResponse, UserRead
from app.schemas.enrichment import DescribeRequest, SpeechRequest, SpeechResult, TextResult
from app.schemas.mod import ModCreateResponse, ModRead, ModWrite, RateRequest, RateResponse

__all__ = [
    "AdminLoginRequest",
    "AuthUrlResponse",
    "MeResponse",
    "SuccessResponse",
    "UserRead",
    "ModWrite",
    "ModRead",
    "ModCreateResponse",
    "RateRequest",
    "RateResponse",
    "DescribeRequest",
    "SpeechRequest",
    "TextResult",
    "SpeechResult",
]
