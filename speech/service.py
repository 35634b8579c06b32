"""
FastAPI router for text-to-speech.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request

from core.exceptions import SynthesisStreamError, ValidationError
from core.formatter import format_audio_response, format_error_response
from logs.logging_config import get_logger
from .schemas import SpeechRequest
from .synthesizer import SpeechSynthesizer

logger = get_logger("tts")

router = APIRouter(prefix="/api", tags=["Speech"])


def get_synthesizer(request: Request) -> SpeechSynthesizer:
    """Synthesizer built at startup."""
    return request.app.state.synthesizer


@router.post("/tts")
async def tts_endpoint(
    body: Optional[SpeechRequest] = None,
    synthesizer: SpeechSynthesizer = Depends(get_synthesizer),
):
    """
    Convert text to speech and return it as a downloadable MP3.

    **Request Body:**
    - `text`: Text to speak (required, non-empty)
    - `language`: Language code (optional, default from config)

    **Returns:**
    - 200: audio bytes with `Content-Disposition: attachment`
    - 400: `No text provided`
    - 500: `Error generating speech: <message>`
    """
    request = body or SpeechRequest()

    try:
        payload = await synthesizer.synthesize(request)
    except ValidationError as e:
        logger.warning(f"[TTS] ERROR | validation | error={e}")
        return format_error_response(str(e), 400)
    except SynthesisStreamError as e:
        logger.error(f"[TTS] ERROR | stream failed | error={e}")
        return format_error_response(f"Error generating speech: {e}", 500)
    except Exception as e:
        logger.error(f"[TTS] ERROR | error={e}", exc_info=True)
        return format_error_response(f"Error generating speech: {e}", 500)

    return format_audio_response(payload.data)
