"""
Speech Configuration

Module-specific settings for text-to-speech synthesis.
"""
import os

# =========================
# TTS Backend Configuration
# =========================

# Google Translate TTS endpoint (returns audio/mpeg)
SPEECH_TTS_URL = os.getenv("SPEECH_TTS_URL", "https://translate.google.com/translate_tts")

SPEECH_USER_AGENT = os.getenv(
    "SPEECH_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)

# =========================
# Request Limits
# =========================

# The endpoint rejects text longer than 200 characters per request
SPEECH_MAX_CHARS_PER_REQUEST = int(os.getenv("SPEECH_MAX_CHARS_PER_REQUEST", "200"))

# Bytes read per stream chunk
SPEECH_CHUNK_SIZE = int(os.getenv("SPEECH_CHUNK_SIZE", "4096"))

# =========================
# Connection Settings
# =========================

# Unset means no deadline on the stream
_stream_timeout = os.getenv("SPEECH_STREAM_TIMEOUT_SECONDS")
SPEECH_STREAM_TIMEOUT_SECONDS = float(_stream_timeout) if _stream_timeout else None

SPEECH_CONNECTION_POOL_LIMIT = int(os.getenv("SPEECH_CONNECTION_POOL_LIMIT", "50"))
