"""
Response Formatter

Maps pipeline outcomes onto the HTTP wire contract.

Summarization failures are rendered as HTML fragments with status 200,
since the client injects the body into the page regardless of status.
Speech and extraction failures use plain-text error bodies with 4xx/5xx.
"""

import html

from fastapi import Response
from fastapi.responses import PlainTextResponse

from .schemas import SummaryResult, SummaryStatus

TIMEOUT_FRAGMENT = (
    '<p style="color: red;">The summary service took too long to respond. '
    'Please try again.</p>'
)

UPSTREAM_ERROR_FRAGMENT = (
    '<p style="color: red;">Error generating summary: {message}</p>'
)

AUDIO_MEDIA_TYPE = "audio/mpeg"
AUDIO_FILENAME = "speech.mp3"


def render_summary(result: SummaryResult) -> str:
    """Body text for a summarization result."""
    if result.status == SummaryStatus.OK:
        return result.html or ""
    if result.status == SummaryStatus.TIMEOUT:
        return TIMEOUT_FRAGMENT
    return UPSTREAM_ERROR_FRAGMENT.format(message=html.escape(result.message or "unknown error"))


def format_summary_response(result: SummaryResult) -> PlainTextResponse:
    """Every summarization outcome is a 200 text/plain response."""
    return PlainTextResponse(render_summary(result), status_code=200)


def format_audio_response(audio: bytes, filename: str = AUDIO_FILENAME) -> Response:
    """Binary audio download."""
    return Response(
        content=audio,
        media_type=AUDIO_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


def format_error_response(message: str, status_code: int) -> PlainTextResponse:
    """Plain-text error body for transport-level failures."""
    return PlainTextResponse(message, status_code=status_code)
