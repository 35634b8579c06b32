"""
Logging setup for the service.

- Console + rotating file handlers (requests, errors, metrics)
- request_id propagated through contextvars and stamped on every record
- Structured LLM request/response/metrics logging
"""
import json
import uuid
import logging
import contextvars
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Dict, Any

from config import estimate_tokens, CONTEXT_WARNING_THRESHOLD, CONTEXT_ERROR_THRESHOLD
from .config import (
    LOG_OUTPUT_DIR,
    LOG_TO_FILE,
    LOG_LEVEL,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_PREVIEW_LENGTH,
    LOG_DATE_FORMAT,
    LOG_DETAILED_FORMAT,
    LOG_SIMPLE_FORMAT,
    LOG_JSON_FORMAT,
    LOG_FILE_REQUESTS,
    LOG_FILE_ERRORS,
    LOG_FILE_METRICS,
)

LOG_DIR = Path(LOG_OUTPUT_DIR)

APP_LOGGER_NAME = "pdf_summarizer"
METRICS_LOGGER_NAME = "pdf_summarizer.metrics"

_request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")

_configured = False


# =========================
# Request Context
# =========================

def generate_request_id() -> str:
    return str(uuid.uuid4())


def set_request_id(request_id: str) -> contextvars.Token:
    return _request_id_var.set(request_id)


def get_request_id() -> str:
    return _request_id_var.get()


def clear_request_id() -> None:
    _request_id_var.set("-")


class RequestContext:
    """
    Binds a request_id to the current task for the duration of a block.

    Usage:
        with RequestContext(request_id):
            logger.info("...")  # record carries request_id
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "RequestContext":
        self._token = set_request_id(self.request_id)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._token is not None:
            _request_id_var.reset(self._token)
            self._token = None


class RequestIdFilter(logging.Filter):
    """Stamp request_id from the active context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id()
        return True


# =========================
# Log Records
# =========================

@dataclass
class LLMRequestLog:
    request_id: str
    timestamp: str
    model: str
    backend: str
    task: str
    prompt_chars: int
    prompt_preview: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class LLMResponseLog:
    request_id: str
    timestamp: str
    model: str
    backend: str
    status: str
    latency_ms: float
    response_chars: int
    response_preview: str
    error_message: Optional[str] = None


@dataclass
class LLMMetrics:
    request_id: str
    timestamp: str
    model: str
    backend: str
    task: str
    latency_ms: float
    prompt_chars: int
    response_chars: int
    status: str
    context_limit: Optional[int] = None
    estimated_tokens: Optional[int] = None
    context_usage_percent: Optional[float] = None


@dataclass
class ContextUsageLog:
    request_id: str
    model: str
    estimated_tokens: int
    context_limit: int
    usage_percent: float


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _preview(text: str) -> str:
    if len(text) <= LOG_PREVIEW_LENGTH:
        return text
    return text[:LOG_PREVIEW_LENGTH] + "..."


# =========================
# Setup
# =========================

def _file_handler(filename: str, level: int, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        LOG_DIR / filename,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(RequestIdFilter())
    return handler


def setup_logging(level: str = LOG_LEVEL, to_file: bool = LOG_TO_FILE) -> logging.Logger:
    """
    Configure application and metrics loggers. Safe to call more than once.
    """
    global _configured

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    if _configured:
        return app_logger

    app_logger.setLevel(level)
    app_logger.propagate = False

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_SIMPLE_FORMAT, datefmt=LOG_DATE_FORMAT))
    console.addFilter(RequestIdFilter())
    app_logger.addHandler(console)

    metrics_logger = logging.getLogger(METRICS_LOGGER_NAME)
    metrics_logger.setLevel(logging.INFO)
    metrics_logger.propagate = False

    if to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        app_logger.addHandler(_file_handler(LOG_FILE_REQUESTS, logging.DEBUG, LOG_DETAILED_FORMAT))
        app_logger.addHandler(_file_handler(LOG_FILE_ERRORS, logging.ERROR, LOG_DETAILED_FORMAT))
        metrics_logger.addHandler(_file_handler(LOG_FILE_METRICS, logging.INFO, LOG_JSON_FORMAT))
    else:
        metrics_logger.addHandler(logging.NullHandler())

    _configured = True
    return app_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child of the application logger, e.g. get_logger("speech")."""
    if name:
        return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
    return logging.getLogger(APP_LOGGER_NAME)


def get_llm_logger() -> logging.Logger:
    return get_logger("llm")


def get_metrics_logger() -> logging.Logger:
    return logging.getLogger(METRICS_LOGGER_NAME)


# =========================
# LLM Call Logging
# =========================

def log_llm_request(
    model: str,
    backend: str,
    task: str,
    prompt: str,
    temperature: float = None,
    max_tokens: int = None
) -> str:
    """Log an outbound LLM request. Returns the active request_id."""
    request_id = get_request_id()
    if request_id == "-":
        request_id = generate_request_id()

    entry = LLMRequestLog(
        request_id=request_id,
        timestamp=_now(),
        model=model,
        backend=backend,
        task=task,
        prompt_chars=len(prompt),
        prompt_preview=_preview(prompt),
        temperature=temperature,
        max_tokens=max_tokens
    )
    get_llm_logger().info(
        f"[LLM_REQUEST] model={entry.model} | backend={entry.backend} | task={entry.task} | "
        f"prompt_chars={entry.prompt_chars}"
    )
    get_llm_logger().debug(f"[LLM_REQUEST] prompt_preview={entry.prompt_preview!r}")
    return request_id


def log_llm_response(
    request_id: str,
    model: str,
    backend: str,
    response: str,
    latency_ms: float,
    status: str,
    error_message: str = None
) -> None:
    entry = LLMResponseLog(
        request_id=request_id,
        timestamp=_now(),
        model=model,
        backend=backend,
        status=status,
        latency_ms=round(latency_ms, 2),
        response_chars=len(response),
        response_preview=_preview(response),
        error_message=error_message
    )
    logger = get_llm_logger()
    if status == "success":
        logger.info(
            f"[LLM_RESPONSE] model={entry.model} | status={entry.status} | "
            f"latency_ms={entry.latency_ms} | response_chars={entry.response_chars}"
        )
        logger.debug(f"[LLM_RESPONSE] response_preview={entry.response_preview!r}")
    else:
        logger.error(
            f"[LLM_RESPONSE] model={entry.model} | status={entry.status} | "
            f"latency_ms={entry.latency_ms} | error={entry.error_message}"
        )


def log_metrics(
    request_id: str,
    model: str,
    backend: str,
    task: str,
    latency_ms: float,
    prompt_chars: int,
    response_chars: int,
    status: str,
    context_limit: int = None,
    estimated_tokens: int = None,
    context_usage_percent: float = None
) -> None:
    """Write one JSON line per LLM call to the metrics logger."""
    metrics = LLMMetrics(
        request_id=request_id,
        timestamp=_now(),
        model=model,
        backend=backend,
        task=task,
        latency_ms=round(latency_ms, 2),
        prompt_chars=prompt_chars,
        response_chars=response_chars,
        status=status,
        context_limit=context_limit,
        estimated_tokens=estimated_tokens,
        context_usage_percent=context_usage_percent
    )
    get_metrics_logger().info(json.dumps(asdict(metrics)))


def log_context_usage(
    request_id: str,
    model: str,
    prompt: str,
    context_limit: int
) -> Dict[str, Any]:
    """Estimate prompt tokens against the model context and warn near the limit."""
    estimated = estimate_tokens(prompt)
    usage_percent = round((estimated / context_limit) * 100, 2) if context_limit else 0.0

    usage = ContextUsageLog(
        request_id=request_id,
        model=model,
        estimated_tokens=estimated,
        context_limit=context_limit,
        usage_percent=usage_percent
    )

    logger = get_llm_logger()
    if usage_percent >= CONTEXT_ERROR_THRESHOLD:
        logger.error(
            f"[CONTEXT] Near context limit | model={model} | tokens={estimated} | "
            f"limit={context_limit} | usage={usage_percent}%"
        )
    elif usage_percent >= CONTEXT_WARNING_THRESHOLD:
        logger.warning(
            f"[CONTEXT] High context usage | model={model} | tokens={estimated} | "
            f"limit={context_limit} | usage={usage_percent}%"
        )

    return {
        "context_limit": usage.context_limit,
        "estimated_tokens": usage.estimated_tokens,
        "usage_percent": usage.usage_percent,
    }
