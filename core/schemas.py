"""
Result types shared between the pipelines and the response formatter.
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass


class SummaryStatus(str, Enum):
    """Outcome of one summarization attempt."""
    OK = "ok"
    TIMEOUT = "timeout"
    UPSTREAM_ERROR = "upstream_error"


@dataclass(frozen=True)
class SummaryResult:
    """
    Tagged result of the summarization orchestrator.

    Exactly one of the variants:
    - OK: html holds the sanitized fragment
    - TIMEOUT: no payload
    - UPSTREAM_ERROR: message holds the failure description
    """
    status: SummaryStatus
    html: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, html: str) -> "SummaryResult":
        return cls(status=SummaryStatus.OK, html=html)

    @classmethod
    def timeout(cls) -> "SummaryResult":
        return cls(status=SummaryStatus.TIMEOUT)

    @classmethod
    def upstream_error(cls, message: str) -> "SummaryResult":
        return cls(status=SummaryStatus.UPSTREAM_ERROR, message=message)

    @property
    def is_ok(self) -> bool:
        return self.status == SummaryStatus.OK
