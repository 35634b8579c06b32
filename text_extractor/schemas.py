"""
Schemas for Text Extraction Module
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class Document:
    """Uploaded document, alive for one request only."""
    content: bytes
    media_type: Optional[str] = None
    filename: str = "document.pdf"

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass
class ExtractedText:
    """Plain text pulled out of a Document."""
    text: str
    filename: str
    total_pages: int = 0

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def word_count(self) -> int:
        return len(self.text.split())
