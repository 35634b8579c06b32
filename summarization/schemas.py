"""
Schemas for the summarization pipeline.
"""
from dataclasses import dataclass

from core.schemas import SummaryResult, SummaryStatus


@dataclass(frozen=True)
class SummaryRequest:
    """One outbound call description, created per request and never reused."""
    model: str
    prompt: str
    deadline_seconds: float


__all__ = ["SummaryRequest", "SummaryResult", "SummaryStatus"]
