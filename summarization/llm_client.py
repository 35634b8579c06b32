"""
Summarization LLM Client

Module-specific LLM client for the summarization service.
Uses BaseLLMClient with summarization-specific configuration.
"""

from config import AppSettings
from core import BaseLLMClient, LLMConfig


def create_llm_client(settings: AppSettings) -> BaseLLMClient:
    """
    Build the Gemini client used for summaries.

    Args:
        settings: Process-wide settings (credential, model, limits)

    Returns:
        A client owning its own connection pool; close() it on shutdown
    """
    config = LLMConfig(
        api_url=settings.gemini_api_url,
        api_key=settings.gemini_api_key,
        model=settings.summary_model,
        temperature=settings.summary_temperature,
        max_tokens=settings.summary_max_tokens,
        timeout=settings.llm_connection_timeout,
        pool_limit=settings.llm_pool_limit,
        task_name="summarize"
    )
    return BaseLLMClient(config)
