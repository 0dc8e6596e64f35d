import base64
import io
import logging
import wave

from google import genai
from google.genai import types

from app.core.config import get_settings

logger = logging.getLogger(__name__)

MAX_TITLE_CHARS = 200
MAX_SPEECH_CHARS = 5000

# Gemini TTS returns raw 16-bit little-endian mono PCM.
TTS_SAMPLE_RATE = 24000
TTS_SAMPLE_WIDTH = 2
TTS_CHANNELS = 1


def _client() -> genai.Client | None:
    settings = get_settings()
    if not settings.gemini_api_key:
        return None
    return genai.Client(api_key=settings.gemini_api_key)


def enrich_description(title: str) -> str | None:
    client = _client()
    if client is None:
        return None

    prompt = (
        f'Find information about the Minecraft mod "{title[:MAX_TITLE_CHARS]}". '
        "Write a concise description in markdown: what the mod adds, its main features, "
        "supported game versions and loader if known. Do not invent features you cannot find."
    )
    try:
        response = client.models.generate_content(
            model=get_settings().gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(tools=[types.Tool(google_search=types.GoogleSearch())]),
        )
        return (response.text or "").strip() or None
    except Exception as exc:  # noqa: BLE001
        logger.warning("gemini_describe_failed", extra={"error": str(exc)})
        return None


def analyze_image(image_bytes: bytes, mime_type: str) -> str | None:
    client = _client()
    if client is None or not image_bytes:
        return None

    try:
        response = client.models.generate_content(
            model=get_settings().gemini_model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                "This is a screenshot from a Minecraft mod. Describe what it shows: "
                "new blocks, items, mobs, structures or interface elements. Keep it under 120 words.",
            ],
        )
        return (response.text or "").strip() or None
    except Exception as exc:  # noqa: BLE001
        logger.warning("gemini_image_analysis_failed", extra={"error": str(exc), "mime_type": mime_type})
        return None


def synthesize_speech(text: str) -> str | None:
    """Read ``text`` aloud; returns a ``data:audio/wav;base64,...`` URL."""
    client = _client()
    if client is None or not text.strip():
        return None

    settings = get_settings()
    try:
        response = client.models.generate_content(
            model=settings.gemini_tts_model,
            contents=f"Say clearly: {text[:MAX_SPEECH_CHARS]}",
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=types.SpeechConfig(
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=settings.gemini_tts_voice),
                    )
                ),
            ),
        )
        pcm = _first_inline_audio(response)
    except Exception as exc:  # noqa: BLE001
        logger.warning("gemini_tts_failed", extra={"error": str(exc)})
        return None
    if not pcm:
        return None
    return "data:audio/wav;base64," + base64.b64encode(pcm_to_wav(pcm)).decode("ascii")


def _first_inline_audio(response: types.GenerateContentResponse) -> bytes | None:
    for candidate in response.candidates or []:
        content = candidate.content
        for part in (content.parts if content else None) or []:
            if part.inline_data and part.inline_data.data:
                return part.inline_data.data
    return None


def pcm_to_wav(pcm: bytes) -> bytes:
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(TTS_CHANNELS)
        wav.setsampwidth(TTS_SAMPLE_WIDTH)
        wav.setframerate(TTS_SAMPLE_RATE)
        wav.writeframes(pcm)
    return buffer.getvalue()
