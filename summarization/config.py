"""
Summarization Configuration

Module-specific settings for document summarization.
"""
import os

# =========================
# LLM Backend Configuration
# =========================

# Gemini REST base URL
SUMMARIZATION_API_URL = os.getenv("SUMMARIZATION_API_URL", "https://generativelanguage.googleapis.com")

# =========================
# Model Settings
# =========================

SUMMARIZATION_DEFAULT_MODEL = os.getenv("SUMMARIZATION_DEFAULT_MODEL", "gemini-2.0-flash")

# =========================
# LLM Settings for Summarization
# =========================

SUMMARIZATION_TEMPERATURE = float(os.getenv("SUMMARIZATION_TEMPERATURE", "0.3"))
SUMMARIZATION_MAX_TOKENS = int(os.getenv("SUMMARIZATION_MAX_TOKENS", "2048"))

# =========================
# Deadline
# =========================

# Measured from send time; the in-flight call is cancelled when it expires
SUMMARIZATION_TIMEOUT_SECONDS = float(os.getenv("SUMMARIZATION_TIMEOUT_SECONDS", "120"))

# =========================
# Connection Settings
# =========================

# HTTP client ceiling, kept above the deadline so the deadline fires first
SUMMARIZATION_CONNECTION_TIMEOUT = int(os.getenv("SUMMARIZATION_CONNECTION_TIMEOUT", "300"))
SUMMARIZATION_CONNECTION_POOL_LIMIT = int(os.getenv("SUMMARIZATION_CONNECTION_POOL_LIMIT", "50"))

# =========================
# Output
# =========================

SUMMARIZATION_EMPTY_FALLBACK = "No summary generated"
SUMMARIZATION_REQUIRED_SECTIONS = ("Main Points", "Author", "Date")
