"""
FastAPI router for PDF summarization.

Pipeline Architecture:
    File upload → Extraction → Summarization → HTML fragment

Extraction failures are transport errors (500). Summarization failures are
rendered into the body as HTML with status 200.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.datastructures import UploadFile

from core.exceptions import ExtractionError
from core.formatter import format_error_response, format_summary_response
from logs.logging_config import get_logger
from text_extractor import Document, TextExtractor
from .summarizer import Summarizer

logger = get_logger("process_pdf")

PDF_FIELD = "pdf"

router = APIRouter(prefix="/api", tags=["Summarization"])


# =====================
# Dependencies
# =====================

def get_extractor(request: Request) -> TextExtractor:
    """Extractor built at startup."""
    return request.app.state.extractor


def get_summarizer(request: Request) -> Summarizer:
    """Summarizer built at startup."""
    return request.app.state.summarizer


# =====================
# API Endpoints
# =====================

@router.post("/process-pdf", response_class=PlainTextResponse)
async def process_pdf_endpoint(
    request: Request,
    extractor: TextExtractor = Depends(get_extractor),
    summarizer: Summarizer = Depends(get_summarizer),
):
    """
    Summarize an uploaded PDF: File → Extraction → Summarization

    **Form Parameters:**
    - `pdf`: The PDF file (required)

    **Returns:**
    - 200 text/plain: HTML fragment with Main Points, Author and Date sections,
      or a rendered error/timeout fragment
    - 400: `No PDF file uploaded`
    - 500: `Error processing PDF: <message>`
    """
    logger.info("[PROCESS_PDF] START | Pipeline: File → Extraction → Summarization")

    try:
        async with request.form() as form:
            upload = form.get(PDF_FIELD)

            if not isinstance(upload, UploadFile):
                logger.warning("[PROCESS_PDF] ERROR | No PDF file uploaded")
                return format_error_response("No PDF file uploaded", 400)

            content = await upload.read()
            document = Document(
                content=content,
                media_type=upload.content_type,
                filename=upload.filename or "document.pdf"
            )

        logger.info(
            f"[PROCESS_PDF] PDF received | filename={document.filename} | "
            f"size={document.size_bytes} bytes"
        )

        # Step 1: Extraction
        extracted = await extractor.extract_text(document)
        logger.info("[PROCESS_PDF] Text extraction complete, generating summary")

    except ExtractionError as e:
        logger.error(f"[PROCESS_PDF] ERROR | extraction failed | error={e}")
        return format_error_response(f"Error processing PDF: {e}", 500)
    except Exception as e:
        logger.error(f"[PROCESS_PDF] ERROR | error={e}", exc_info=True)
        return format_error_response(f"Error processing PDF: {e}", 500)

    # Step 2: Summarization (never raises for upstream failures)
    result = await summarizer.summarize(extracted)

    logger.info(f"[PROCESS_PDF] END | outcome={result.status.value}")
    return format_summary_response(result)
