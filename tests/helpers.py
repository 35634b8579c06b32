"""Test doubles and builders shared across test modules."""

import asyncio
from typing import List, Optional

import fitz


class FakeLLMClient:
    """Stand-in for BaseLLMClient.

    Returns a canned reply, raises a canned error, or sleeps for `delay`
    seconds first. Records prompts and whether the call was cancelled.
    """

    def __init__(
        self,
        response: Optional[str] = "",
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts: List[str] = []
        self.models: List[str] = []
        self.cancelled = False
        self.finished = False

    async def generate_text_with_logging(self, prompt, model=None, temperature=None, max_tokens=None, task=None):
        self.prompts.append(prompt)
        self.models.append(model)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        self.finished = True
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        pass


class FakeSpeechClient:
    """Stand-in for SpeechClient that yields fixed chunks, then optionally fails."""

    def __init__(self, chunks: List[bytes], error: Optional[Exception] = None):
        self.chunks = chunks
        self.error = error
        self.calls: List[tuple] = []

    async def stream(self, text: str, language: str):
        self.calls.append((text, language))
        for chunk in self.chunks:
            await asyncio.sleep(0)
            yield chunk
        if self.error is not None:
            raise self.error

    async def close(self):
        pass


def make_pdf(*pages: str) -> bytes:
    """Build an in-memory PDF, one page per argument (empty string = blank page)."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data

