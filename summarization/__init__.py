"""
Summarization Module

Summarizes extracted document text into a fixed HTML template:
- Main Points, Author and Date sections (h1 + ul/li, inline styles)
- One deadline-bound LLM call per document, cancelled on expiry
- Fenced-code wrappers stripped from the reply
"""

from .service import router, get_extractor, get_summarizer
from .summarizer import Summarizer, sanitize_summary, missing_sections
from .llm_client import create_llm_client
from .schemas import SummaryRequest, SummaryResult, SummaryStatus

__all__ = [
    # Router
    "router",
    "get_extractor",
    "get_summarizer",
    # Orchestrator
    "Summarizer",
    "sanitize_summary",
    "missing_sections",
    "create_llm_client",
    # Schemas
    "SummaryRequest",
    "SummaryResult",
    "SummaryStatus",
]
