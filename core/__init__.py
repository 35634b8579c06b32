"""
Core Module

Shared infrastructure components for all modules:
- LLM client base class
- Exception hierarchy
- Validators
- Result types and response formatting
"""

from .llm_client_base import BaseLLMClient, LLMConfig
from .exceptions import (
    ServiceError,
    ValidationError,
    ExtractionError,
    LLMServiceError,
    UpstreamTimeoutError,
    SynthesisStreamError,
)
from .schemas import SummaryResult, SummaryStatus
from .validators import (
    validate_page_count,
    validate_file_size,
    validate_required_field,
)

__all__ = [
    "BaseLLMClient",
    "LLMConfig",
    "ServiceError",
    "ValidationError",
    "ExtractionError",
    "LLMServiceError",
    "UpstreamTimeoutError",
    "SynthesisStreamError",
    "SummaryResult",
    "SummaryStatus",
    "validate_page_count",
    "validate_file_size",
    "validate_required_field",
]
