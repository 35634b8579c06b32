"""
Audio stream aggregation.

A small state machine that collects byte chunks from a stream:

    COLLECTING --data--> COLLECTING
    COLLECTING --end---> COMPLETE  (emits the concatenated payload)
    COLLECTING --error-> FAILED    (drops everything collected so far)

Nothing is released before the stream ends normally, so a consumer never
sees a partial payload.
"""
import asyncio
from typing import AsyncIterator, List, Optional

from core.exceptions import SynthesisStreamError
from .schemas import AudioPayload, StreamState


class AudioAggregator:
    """Single-use collector for one audio stream."""

    def __init__(self):
        self.state = StreamState.COLLECTING
        self.error: Optional[BaseException] = None
        self._chunks: List[bytes] = []

    @property
    def buffered_chunks(self) -> int:
        return len(self._chunks)

    def _require_collecting(self, event: str) -> None:
        if self.state != StreamState.COLLECTING:
            raise RuntimeError(f"Received '{event}' after stream reached state '{self.state.value}'")

    def on_data(self, chunk: bytes) -> None:
        self._require_collecting("data")
        if chunk:
            self._chunks.append(bytes(chunk))

    def on_error(self, error: BaseException) -> None:
        self._require_collecting("error")
        self._chunks.clear()
        self.error = error
        self.state = StreamState.FAILED

    def on_end(self) -> AudioPayload:
        self._require_collecting("end")
        payload = AudioPayload(data=b"".join(self._chunks), chunk_count=len(self._chunks))
        self._chunks.clear()
        self.state = StreamState.COMPLETE
        return payload

    async def consume(self, stream: AsyncIterator[bytes]) -> AudioPayload:
        """
        Drain a byte stream into one payload.

        Raises:
            SynthesisStreamError: The stream raised before finishing
        """
        try:
            async for chunk in stream:
                self.on_data(chunk)
        except asyncio.CancelledError as e:
            self.on_error(e)
            raise
        except Exception as e:
            self.on_error(e)
            raise SynthesisStreamError(str(e) or e.__class__.__name__) from e

        return self.on_end()
