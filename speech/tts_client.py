"""
Streaming TTS client for the Google Translate speech endpoint (MP3 bytes).

Long text is split on whitespace into segments the endpoint accepts and the
segments are fetched in order, yielding one continuous byte stream.
"""
import aiohttp
from typing import AsyncIterator, List, Optional

from config import AppSettings
from core.exceptions import SynthesisStreamError
from logs.logging_config import get_logger
from .config import (
    SPEECH_TTS_URL,
    SPEECH_USER_AGENT,
    SPEECH_MAX_CHARS_PER_REQUEST,
    SPEECH_CHUNK_SIZE,
    SPEECH_CONNECTION_POOL_LIMIT,
)

logger = get_logger("tts_client")


def split_text(text: str, max_chars: int = SPEECH_MAX_CHARS_PER_REQUEST) -> List[str]:
    """
    Split text into whitespace-delimited segments of at most max_chars.

    Words longer than max_chars are cut into max_chars pieces.
    """
    segments: List[str] = []
    current = ""

    for word in text.split():
        while len(word) > max_chars:
            if current:
                segments.append(current)
                current = ""
            segments.append(word[:max_chars])
            word = word[max_chars:]
        if not word:
            continue

        candidate = f"{current} {word}" if current else word
        if len(candidate) > max_chars:
            segments.append(current)
            current = word
        else:
            current = candidate

    if current:
        segments.append(current)

    return segments


class SpeechClient:
    """
    Streaming TTS client with its own connection pool.

    Example:
        client = SpeechClient()
        async for chunk in client.stream("hello", "en"):
            ...
    """

    def __init__(
        self,
        url: str = SPEECH_TTS_URL,
        max_chars: int = SPEECH_MAX_CHARS_PER_REQUEST,
        chunk_size: int = SPEECH_CHUNK_SIZE,
        timeout: Optional[float] = None,
        pool_limit: int = SPEECH_CONNECTION_POOL_LIMIT
    ):
        self.url = url
        self.max_chars = max_chars
        self.chunk_size = chunk_size
        self.timeout = timeout
        self.pool_limit = pool_limit
        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "SpeechClient":
        return cls(
            url=settings.tts_url,
            max_chars=settings.tts_max_chars,
            chunk_size=settings.tts_chunk_size,
            timeout=settings.tts_stream_timeout_seconds
        )

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session for this instance."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                connector=aiohttp.TCPConnector(
                    limit=self.pool_limit,
                    limit_per_host=self.pool_limit
                ),
                headers={
                    "User-Agent": SPEECH_USER_AGENT,
                    "Referer": "https://translate.google.com/"
                }
            )
            logger.debug(f"[TTS] Session created | url={self.url}")
        return self._session

    async def close(self):
        """Close this instance's session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug("[TTS] Session closed")

    async def stream(self, text: str, language: str) -> AsyncIterator[bytes]:
        """
        Yield audio bytes for text in the given language.

        Raises (during iteration):
            SynthesisStreamError: Non-success HTTP status
            aiohttp.ClientError / asyncio.TimeoutError: Transport failure
        """
        segments = split_text(text, self.max_chars)
        session = await self.get_session()

        logger.debug(f"[TTS] Streaming | language={language} | segments={len(segments)}")

        for idx, segment in enumerate(segments):
            params = {
                "ie": "UTF-8",
                "client": "tw-ob",
                "tl": language,
                "q": segment,
                "total": str(len(segments)),
                "idx": str(idx),
                "textlen": str(len(segment)),
            }
            async with session.get(self.url, params=params) as r:
                if r.status >= 400:
                    raise SynthesisStreamError(
                        f"Speech service returned HTTP {r.status} for segment {idx + 1}/{len(segments)}"
                    )
                async for chunk in r.content.iter_chunked(self.chunk_size):
                    yield chunk
