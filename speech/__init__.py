"""
Speech Module

Text-to-speech over a streaming HTTP endpoint:
- Whitespace segmentation for the endpoint's per-request limit
- All-or-nothing aggregation of the byte stream
"""

from .schemas import SpeechRequest, AudioPayload, StreamState
from .aggregator import AudioAggregator
from .tts_client import SpeechClient, split_text
from .synthesizer import SpeechSynthesizer
from .service import router, get_synthesizer

__all__ = [
    "router",
    "get_synthesizer",
    "SpeechRequest",
    "AudioPayload",
    "StreamState",
    "AudioAggregator",
    "SpeechClient",
    "split_text",
    "SpeechSynthesizer",
]
