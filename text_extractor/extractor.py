"""
Text Extractor

Extracts plain text from PDF documents held in memory.
Pages are read in order and joined with blank lines.
"""

import asyncio
from typing import List, Tuple

import fitz  # PyMuPDF for PDF

from core.exceptions import ExtractionError
from core.validators import validate_file_size, validate_page_count
from logs.logging_config import get_logger
from .config import (
    EXTRACTOR_SUPPORTED_MEDIA_TYPES,
    EXTRACTOR_PAGE_SEPARATOR,
    EXTRACTOR_MAX_FILE_SIZE_MB,
    EXTRACTOR_MAX_PAGES,
)
from .schemas import Document, ExtractedText

logger = get_logger("extractor")


class TextExtractor:
    """
    Extracts text from uploaded PDF bytes.

    One attempt per call; any failure surfaces as ExtractionError.
    Parsing is CPU-bound and runs in a worker thread.
    """

    def __init__(
        self,
        max_file_size_mb: int = EXTRACTOR_MAX_FILE_SIZE_MB,
        max_pages: int = EXTRACTOR_MAX_PAGES
    ):
        self.max_file_size_mb = max_file_size_mb
        self.max_pages = max_pages

    async def extract_text(self, document: Document) -> ExtractedText:
        """
        Extract text from document.

        Args:
            document: Uploaded document bytes and metadata

        Returns:
            ExtractedText with non-empty text

        Raises:
            ExtractionError: Unreadable, oversized or textless document
        """
        if document.media_type and document.media_type not in EXTRACTOR_SUPPORTED_MEDIA_TYPES:
            logger.warning(
                f"[EXTRACT] Unexpected media type | filename={document.filename} | "
                f"media_type={document.media_type}"
            )

        try:
            validate_file_size(document.size_bytes, self.max_file_size_mb, "Extractor")
        except ValueError as e:
            raise ExtractionError(str(e)) from e

        logger.info(
            f"[EXTRACT] START | filename={document.filename} | bytes={document.size_bytes}"
        )

        text, total_pages = await asyncio.to_thread(self._extract_pdf, document.content)

        if not text.strip():
            raise ExtractionError(f"No extractable text found in {document.filename}")

        result = ExtractedText(text=text, filename=document.filename, total_pages=total_pages)
        logger.info(
            f"[EXTRACT] END | pages={total_pages} | chars={result.char_count} | "
            f"words={result.word_count}"
        )
        return result

    def _extract_pdf(self, content: bytes) -> Tuple[str, int]:
        """Open PDF bytes with PyMuPDF and read every page."""
        try:
            doc = fitz.open(stream=content, filetype="pdf")
        except Exception as e:
            raise ExtractionError(f"Invalid or corrupt PDF: {e}") from e

        try:
            if doc.needs_pass:
                raise ExtractionError("PDF is password protected")

            total_pages = len(doc)
            try:
                validate_page_count(total_pages, self.max_pages, "Extractor")
            except ValueError as e:
                raise ExtractionError(str(e)) from e

            pages: List[str] = []
            for page_num in range(total_pages):
                try:
                    page_text = doc[page_num].get_text("text")
                except Exception as e:
                    raise ExtractionError(f"Failed to read page {page_num + 1}: {e}") from e
                if page_text.strip():
                    pages.append(page_text.strip())

            return EXTRACTOR_PAGE_SEPARATOR.join(pages), total_pages

        finally:
            doc.close()
