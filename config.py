"""
Global Configuration

Shared settings used across all modules.
Module-specific settings are in each module's config.py file.

All settings can be overridden via environment variables or a .env file.
See .env.example for a complete list of configurable variables.
"""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Load .env file before any os.getenv() calls
load_dotenv()
from functools import lru_cache

import tiktoken

# =========================
# Server Configuration
# =========================

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# =========================
# Credentials
# =========================

# Older deployments export the key as KEY
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("KEY", "")

# =========================
# Speech Defaults
# =========================

DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")

# =========================
# Model Context Lengths
# =========================

MODEL_CONTEXT_LENGTHS = {
    "gemini-2.0-flash": 1048576,
    "gemini-2.0-flash-lite": 1048576,
    "gemini-1.5-pro": 2097152,
}

DEFAULT_CONTEXT_LENGTH = 1048576  # Fallback for unknown models

# Context usage warning thresholds (percentage)
CONTEXT_WARNING_THRESHOLD = 80
CONTEXT_ERROR_THRESHOLD = 95


# =========================
# Application Settings
# =========================

@dataclass(frozen=True)
class AppSettings:
    """
    Immutable process-wide settings.

    Built once at startup by load_settings() and handed to every component.
    Nothing mutates it after construction.
    """
    gemini_api_key: str
    gemini_api_url: str
    summary_model: str
    summary_timeout_seconds: float
    summary_temperature: float
    summary_max_tokens: int
    llm_connection_timeout: int
    llm_pool_limit: int
    default_language: str
    tts_url: str
    tts_max_chars: int
    tts_chunk_size: int
    tts_stream_timeout_seconds: Optional[float]
    extractor_max_file_size_mb: int
    extractor_max_pages: int


def load_settings() -> AppSettings:
    """Read module configs into a single frozen AppSettings."""
    from summarization.config import (
        SUMMARIZATION_API_URL,
        SUMMARIZATION_DEFAULT_MODEL,
        SUMMARIZATION_TIMEOUT_SECONDS,
        SUMMARIZATION_TEMPERATURE,
        SUMMARIZATION_MAX_TOKENS,
        SUMMARIZATION_CONNECTION_TIMEOUT,
        SUMMARIZATION_CONNECTION_POOL_LIMIT,
    )
    from speech.config import (
        SPEECH_TTS_URL,
        SPEECH_MAX_CHARS_PER_REQUEST,
        SPEECH_CHUNK_SIZE,
        SPEECH_STREAM_TIMEOUT_SECONDS,
    )
    from text_extractor.config import (
        EXTRACTOR_MAX_FILE_SIZE_MB,
        EXTRACTOR_MAX_PAGES,
    )

    return AppSettings(
        gemini_api_key=GEMINI_API_KEY,
        gemini_api_url=SUMMARIZATION_API_URL,
        summary_model=SUMMARIZATION_DEFAULT_MODEL,
        summary_timeout_seconds=SUMMARIZATION_TIMEOUT_SECONDS,
        summary_temperature=SUMMARIZATION_TEMPERATURE,
        summary_max_tokens=SUMMARIZATION_MAX_TOKENS,
        llm_connection_timeout=SUMMARIZATION_CONNECTION_TIMEOUT,
        llm_pool_limit=SUMMARIZATION_CONNECTION_POOL_LIMIT,
        default_language=DEFAULT_LANGUAGE,
        tts_url=SPEECH_TTS_URL,
        tts_max_chars=SPEECH_MAX_CHARS_PER_REQUEST,
        tts_chunk_size=SPEECH_CHUNK_SIZE,
        tts_stream_timeout_seconds=SPEECH_STREAM_TIMEOUT_SECONDS,
        extractor_max_file_size_mb=EXTRACTOR_MAX_FILE_SIZE_MB,
        extractor_max_pages=EXTRACTOR_MAX_PAGES,
    )


# =========================
# Utility Functions
# =========================

@lru_cache(maxsize=32)
def get_model_context_length(model: str) -> int:
    """Get context length for a model (cached)."""
    return MODEL_CONTEXT_LENGTHS.get(model, DEFAULT_CONTEXT_LENGTH)


@lru_cache(maxsize=1)
def _get_encoder():
    """
    Load the cl100k_base encoding on first use.

    For airgapped systems, set TIKTOKEN_CACHE_DIR to a directory containing
    pre-cached encoding files; None when the encoding cannot be loaded.
    """
    try:
        return tiktoken.get_encoding("cl100k_base")
    except Exception:
        return None


def estimate_tokens(text: str) -> int:
    """
    Estimate token count using tiktoken, or ~4 chars per token when the
    encoding files could not be loaded.
    """
    encoder = _get_encoder()
    if encoder is not None:
        return len(encoder.encode(text))
    return len(text) // 4
