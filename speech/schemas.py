"""
Schemas for the speech synthesis API.
"""
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from pydantic import BaseModel, Field


class SpeechRequest(BaseModel):
    """Text to speak. Emptiness is checked by the synthesizer, not here."""
    text: Optional[str] = Field(None, description="Text to convert to speech")
    language: Optional[str] = Field(
        None,
        description="Language code (e.g. 'en', 'fr'). Defaults to the configured language."
    )


class StreamState(str, Enum):
    """Aggregator states: COLLECTING -> COMPLETE | FAILED."""
    COLLECTING = "collecting"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class AudioPayload:
    """Contiguous audio buffer, released only after the stream ended normally."""
    data: bytes
    chunk_count: int = 0

    @property
    def size_bytes(self) -> int:
        return len(self.data)
