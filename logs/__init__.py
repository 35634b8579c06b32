"""
Logs Module

Provides:
- Logging configuration (console + rotating files)
- LLM request/response logging with metrics
- Request context tracking (request_id)
"""

from .logging_config import (
    setup_logging,
    get_logger,
    get_llm_logger,
    get_metrics_logger,
    log_llm_request,
    log_llm_response,
    log_metrics,
    log_context_usage,
    RequestContext,
    set_request_id,
    get_request_id,
    clear_request_id,
    generate_request_id,
    LOG_DIR,
    ContextUsageLog,
    LLMRequestLog,
    LLMResponseLog,
    LLMMetrics
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_llm_logger",
    "get_metrics_logger",
    "log_llm_request",
    "log_llm_response",
    "log_metrics",
    "log_context_usage",
    "RequestContext",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
    "generate_request_id",
    "LOG_DIR",
    "ContextUsageLog",
    "LLMRequestLog",
    "LLMResponseLog",
    "LLMMetrics"
]
