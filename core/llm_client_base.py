"""
Base LLM Client

Provides shared LLM client functionality for all modules.
Each module creates its own instance with its own configuration.

Features:
- Google Gemini generateContent backend over plain HTTP
- Module-specific configuration (URL, model, credential, etc.)
- Connection pooling per instance
- Comprehensive logging
- Error handling

Usage:
    # In module's llm_client.py
    from core.llm_client_base import BaseLLMClient, LLMConfig

    config = LLMConfig(
        api_url="https://generativelanguage.googleapis.com",
        api_key="...",
        model="gemini-2.0-flash",
        task_name="summarize"
    )

    client = BaseLLMClient(config)
    response = await client.generate_text_with_logging(prompt)
"""

import time
import asyncio
import aiohttp
from dataclasses import dataclass
from typing import Optional, Dict, Any

from config import get_model_context_length
from logs.logging_config import (
    get_llm_logger,
    log_llm_request,
    log_llm_response,
    log_metrics,
    log_context_usage,
)
from .exceptions import LLMServiceError, UpstreamTimeoutError

logger = get_llm_logger()


@dataclass
class LLMConfig:
    """
    Configuration for an LLM client instance.

    Each module creates its own LLMConfig with module-specific settings,
    so different modules can point at different models or endpoints.

    Example:
        summarization_config = LLMConfig(
            api_key=settings.gemini_api_key,
            model="gemini-2.0-flash",
            task_name="summarize"
        )
    """
    # Backend name, used for logging and metrics
    backend: str = "gemini"

    # Gemini REST endpoint
    api_url: str = "https://generativelanguage.googleapis.com"
    api_version: str = "v1beta"
    api_key: str = ""

    # Model settings
    model: str = "gemini-2.0-flash"
    temperature: float = 0.3
    max_tokens: int = 2048

    # Connection settings
    timeout: int = 300
    pool_limit: int = 50

    # Logging identifier
    task_name: str = "unknown"

    def get_generate_url(self, model: str = None) -> str:
        """Get the generateContent URL for a model."""
        base = self.api_url.rstrip("/")
        return f"{base}/{self.api_version}/models/{model or self.model}:generateContent"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (credential omitted)."""
        return {
            "backend": self.backend,
            "api_url": self.api_url,
            "api_version": self.api_version,
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "pool_limit": self.pool_limit,
            "task_name": self.task_name,
        }


class BaseLLMClient:
    """
    Base LLM client for the Gemini generateContent API.

    Each module creates its OWN INSTANCE with its OWN CONFIGURATION.

    Features:
    - Connection pooling (per instance)
    - Request/response logging
    - Metrics collection
    - Error handling with proper cleanup

    Example:
        config = LLMConfig(api_key="...", model="gemini-2.0-flash")
        client = BaseLLMClient(config)

        response = await client.generate_text_with_logging(
            prompt="Summarize this",
            temperature=0.3
        )
    """

    def __init__(self, config: LLMConfig):
        """
        Initialize LLM client with module-specific configuration.

        Args:
            config: LLMConfig with URL, model, credential and other settings
        """
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

        if not config.api_key:
            logger.warning(
                f"[{config.task_name.upper()}_LLM] No API key configured, "
                f"requests will be rejected upstream"
            )

        logger.debug(
            f"[{config.task_name.upper()}_LLM] Initialized | "
            f"backend={config.backend} | model={config.model} | "
            f"url={config.api_url}"
        )

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Get or create aiohttp session for this instance.

        Created lazily so the client can be built outside a running loop.
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            connector = aiohttp.TCPConnector(
                limit=self.config.pool_limit,
                limit_per_host=self.config.pool_limit
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector
            )
            logger.debug(
                f"[{self.config.task_name.upper()}_LLM] Session created | "
                f"backend={self.config.backend}"
            )
        return self._session

    async def close(self):
        """Close this instance's session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug(f"[{self.config.task_name.upper()}_LLM] Session closed")

    async def generate_text_with_logging(
        self,
        prompt: str,
        model: str = None,
        temperature: float = None,
        max_tokens: int = None,
        task: str = None,
    ) -> str:
        """
        Generate text with full request/response/metrics logging.

        Args:
            prompt: The prompt to send to the LLM
            model: Override model (uses config.model if not specified)
            temperature: Override temperature (uses config.temperature if not specified)
            max_tokens: Override max_tokens (uses config.max_tokens if not specified)
            task: Override task name for logging (uses config.task_name if not specified)

        Returns:
            Generated text response, possibly empty

        Raises:
            UpstreamTimeoutError: The HTTP client timed out
            LLMServiceError: Any other transport or API failure
        """
        model_name = model or self.config.model
        temp = temperature if temperature is not None else self.config.temperature
        max_tok = max_tokens if max_tokens is not None else self.config.max_tokens
        task_name = task or self.config.task_name

        context_limit = get_model_context_length(model_name)

        request_id = log_llm_request(
            model=model_name,
            backend=self.config.backend,
            task=task_name,
            prompt=prompt,
            temperature=temp,
            max_tokens=max_tok
        )

        context_stats = log_context_usage(
            request_id=request_id,
            model=model_name,
            prompt=prompt,
            context_limit=context_limit
        )

        start_time = time.time()

        def _record(status: str, response: str = "", error: str = None):
            latency_ms = (time.time() - start_time) * 1000
            log_llm_response(
                request_id=request_id,
                model=model_name,
                backend=self.config.backend,
                response=response,
                latency_ms=latency_ms,
                status=status,
                error_message=error
            )
            log_metrics(
                request_id=request_id,
                model=model_name,
                backend=self.config.backend,
                task=task_name,
                latency_ms=latency_ms,
                prompt_chars=len(prompt),
                response_chars=len(response),
                status=status,
                context_limit=context_stats["context_limit"],
                estimated_tokens=context_stats["estimated_tokens"],
                context_usage_percent=context_stats["usage_percent"]
            )

        try:
            response = await self._call_gemini(prompt, model_name, temp, max_tok)
        except asyncio.CancelledError:
            _record("cancelled", error="request cancelled")
            raise
        except Exception as e:
            _record("error", error=str(e))
            raise

        _record("success", response=response)
        return response

    async def _call_gemini(
        self,
        prompt: str,
        model: str,
        temperature: float,
        max_tokens: int
    ) -> str:
        """
        Call the Gemini generateContent endpoint.

        Args:
            prompt: The prompt text
            model: Model name
            temperature: Generation temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Concatenated text of the first candidate ("" when there is none)
        """
        url = self.config.get_generate_url(model)

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens
            }
        }
        headers = {"x-goog-api-key": self.config.api_key}

        logger.debug(
            f"[{self.config.task_name.upper()}_LLM] Calling Gemini | "
            f"url={url} | model={model}"
        )

        try:
            session = await self.get_session()
            async with session.post(url, json=payload, headers=headers) as r:
                if r.status >= 400:
                    detail = await self._error_detail(r)
                    raise LLMServiceError(f"Gemini returned HTTP {r.status}: {detail}")
                response_data = await r.json()
                return self._extract_text(response_data)

        except asyncio.TimeoutError:
            logger.error(
                f"[{self.config.task_name.upper()}_LLM] Gemini timeout | model={model}"
            )
            raise UpstreamTimeoutError(
                f"{self.config.task_name.title()} LLM request timed out. Please try again."
            )

        except aiohttp.ClientError as e:
            logger.error(
                f"[{self.config.task_name.upper()}_LLM] Gemini request failed | "
                f"model={model} | error={e}"
            )
            raise LLMServiceError(
                f"{self.config.task_name.title()} LLM service unavailable: {e}"
            )

    @staticmethod
    async def _error_detail(response: aiohttp.ClientResponse) -> str:
        """Best-effort error message from a failed Gemini response."""
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            return response.reason or "unknown error"
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return error["message"]
        return response.reason or "unknown error"

    @staticmethod
    def _extract_text(response_data: Dict[str, Any]) -> str:
        """Join the text parts of the first candidate."""
        candidates = response_data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    def get_backend_info(self) -> Dict[str, Any]:
        """
        Get information about this client's backend configuration.

        Returns:
            Config dictionary (credential omitted) plus the resolved
            generate URL and whether a key is configured
        """
        info = self.config.to_dict()
        info["generate_url"] = self.config.get_generate_url()
        info["has_api_key"] = bool(self.config.api_key)
        return info
