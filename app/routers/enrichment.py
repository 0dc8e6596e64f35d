from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.routers.deps import require_admin
from app.schemas.enrichment import DescribeRequest, SpeechRequest, SpeechResult, TextResult
from app.services.llm import gemini_client
from app.services.storage import read_image_upload

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/describe", response_model=TextResult, dependencies=[Depends(require_admin)])
def describe_mod(payload: DescribeRequest) -> TextResult:
    text = gemini_client.enrich_description(payload.title)
    return TextResult(text=text, available=text is not None)


@router.post("/analyze-image", response_model=TextResult)
async def analyze_screenshot(file: UploadFile = File(...)) -> TextResult:
    image_bytes, mime_type = await read_image_upload(file)
    text = await run_in_threadpool(gemini_client.analyze_image, image_bytes, mime_type)
    return TextResult(text=text, available=text is not None)


@router.post("/speech", response_model=SpeechResult)
def speak_text(payload: SpeechRequest) -> SpeechResult:
    audio_url = gemini_client.synthesize_speech(payload.text)
    return SpeechResult(audio_url=audio_url, available=audio_url is not None)
