"""
Summarization orchestrator.

One bounded-latency call per document:
1. Embed the extracted text in the summary template
2. Send it to the LLM as its own task, with a deadline from send time
3. Cancel the task if the deadline passes, otherwise sanitize the reply

No retries on any path; callers that want one call summarize() again.
"""
import re
import time
import asyncio
from typing import Optional

from config import AppSettings
from core.exceptions import UpstreamTimeoutError
from core.llm_client_base import BaseLLMClient
from logs.logging_config import get_logger
from text_extractor.schemas import ExtractedText
from .config import (
    SUMMARIZATION_DEFAULT_MODEL,
    SUMMARIZATION_TIMEOUT_SECONDS,
    SUMMARIZATION_EMPTY_FALLBACK,
    SUMMARIZATION_REQUIRED_SECTIONS,
)
from .prompts import get_summary_prompt
from .schemas import SummaryRequest, SummaryResult

logger = get_logger("summarizer")

FENCE = "```"

# Greedy: first opening fence to last closing fence.
# A language tag is dropped only when it is "html" or sits alone on the fence line.
_FENCED_BLOCK = re.compile(
    r"```(?:html\b|[\w+-]+(?=[ \t]*\r?\n))?(.*)```",
    re.DOTALL | re.IGNORECASE
)


def sanitize_summary(raw: Optional[str]) -> str:
    """
    Strip an optional fenced code wrapper from an LLM reply.

    - Empty or missing reply -> SUMMARIZATION_EMPTY_FALLBACK
    - Fenced reply -> content between the first and last fence, trimmed
    - No closing fence, or no fence at all -> reply unchanged
    """
    if not raw or not raw.strip():
        return SUMMARIZATION_EMPTY_FALLBACK

    if FENCE not in raw:
        return raw

    match = _FENCED_BLOCK.search(raw)
    if match and match.group(1).strip():
        return match.group(1).strip()

    return raw


def missing_sections(html: str) -> list:
    """Required section headings absent from a summary fragment."""
    missing = []
    for title in SUMMARIZATION_REQUIRED_SECTIONS:
        if not re.search(rf"<h1[^>]*>\s*{re.escape(title)}\s*</h1>\s*<ul", html, re.IGNORECASE):
            missing.append(title)
    return missing


def _discard_outcome(task: asyncio.Task) -> None:
    """Retrieve a cancelled call's outcome so it is never reported as unhandled."""
    if not task.cancelled():
        task.exception()


class Summarizer:
    """
    Issues one deadline-bound summary request per document.

    Example:
        summarizer = Summarizer.from_settings(settings, client)
        result = await summarizer.summarize(extracted)
    """

    def __init__(
        self,
        client: BaseLLMClient,
        model: str = SUMMARIZATION_DEFAULT_MODEL,
        deadline_seconds: float = SUMMARIZATION_TIMEOUT_SECONDS
    ):
        self.client = client
        self.model = model
        self.deadline_seconds = deadline_seconds

    @classmethod
    def from_settings(cls, settings: AppSettings, client: BaseLLMClient) -> "Summarizer":
        return cls(
            client=client,
            model=settings.summary_model,
            deadline_seconds=settings.summary_timeout_seconds
        )

    def build_request(self, text: ExtractedText) -> SummaryRequest:
        return SummaryRequest(
            model=self.model,
            prompt=get_summary_prompt(text.text),
            deadline_seconds=self.deadline_seconds
        )

    async def summarize(self, text: ExtractedText) -> SummaryResult:
        """
        Summarize extracted text into the HTML template.

        Returns:
            SummaryResult.ok(html), .timeout() or .upstream_error(message)
        """
        request = self.build_request(text)

        logger.info(
            f"[SUMMARIZE] START | model={request.model} | chars={text.char_count} | "
            f"deadline={request.deadline_seconds}s"
        )

        start_time = time.time()
        call = asyncio.create_task(
            self.client.generate_text_with_logging(
                prompt=request.prompt,
                model=request.model,
                task="summarize"
            )
        )

        try:
            done, _ = await asyncio.wait({call}, timeout=request.deadline_seconds)
        except asyncio.CancelledError:
            call.cancel()
            raise

        latency_ms = (time.time() - start_time) * 1000

        if call not in done:
            call.cancel()
            call.add_done_callback(_discard_outcome)
            logger.error(
                f"[SUMMARIZE] TIMEOUT | deadline={request.deadline_seconds}s | "
                f"latency_ms={latency_ms:.2f} | call cancelled"
            )
            return SummaryResult.timeout()

        try:
            raw = call.result()
        except UpstreamTimeoutError as e:
            logger.error(f"[SUMMARIZE] TIMEOUT | latency_ms={latency_ms:.2f} | error={e}")
            return SummaryResult.timeout()
        except Exception as e:
            logger.error(f"[SUMMARIZE] ERROR | latency_ms={latency_ms:.2f} | error={e}")
            return SummaryResult.upstream_error(str(e) or e.__class__.__name__)

        logger.debug(f"[SUMMARIZE] Raw response: {raw!r}")
        html = sanitize_summary(raw)
        logger.debug(f"[SUMMARIZE] Cleaned response: {html!r}")

        missing = missing_sections(html)
        if missing:
            logger.warning(f"[SUMMARIZE] Response deviates from template | missing={missing}")

        logger.info(f"[SUMMARIZE] END | latency_ms={latency_ms:.2f} | html_chars={len(html)}")
        return SummaryResult.ok(html)
