"""
Speech synthesis aggregator.

Validates the request, opens the TTS byte stream and collects it into a
single AudioPayload. No deadline is applied to the stream.
"""
import time

from core.validators import validate_required_field
from logs.logging_config import get_logger
from .aggregator import AudioAggregator
from .schemas import AudioPayload, SpeechRequest
from .tts_client import SpeechClient

logger = get_logger("speech")

NO_TEXT_MESSAGE = "No text provided"


class SpeechSynthesizer:
    """Turns a SpeechRequest into one complete audio buffer."""

    def __init__(self, client: SpeechClient, default_language: str = "en"):
        self.client = client
        self.default_language = default_language

    def resolve_language(self, language: str = None) -> str:
        return (language or "").strip() or self.default_language

    async def synthesize(self, request: SpeechRequest) -> AudioPayload:
        """
        Synthesize speech for request.text.

        Raises:
            ValidationError: text is missing or blank
            SynthesisStreamError: the stream failed; nothing is returned
        """
        text = validate_required_field(request.text, "text", NO_TEXT_MESSAGE)
        language = self.resolve_language(request.language)

        logger.info(f"[TTS] START | language={language} | chars={len(text)}")
        start_time = time.time()

        aggregator = AudioAggregator()
        try:
            payload = await aggregator.consume(self.client.stream(text, language))
        except Exception as e:
            latency_ms = (time.time() - start_time) * 1000
            logger.error(
                f"[TTS] ERROR | state={aggregator.state.value} | "
                f"latency_ms={latency_ms:.2f} | error={e}"
            )
            raise

        latency_ms = (time.time() - start_time) * 1000
        logger.info(
            f"[TTS] END | bytes={payload.size_bytes} | chunks={payload.chunk_count} | "
            f"latency_ms={latency_ms:.2f}"
        )
        return payload
