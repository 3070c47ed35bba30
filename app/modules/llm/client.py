"""
HTTP client for the OpenAI and Anthropic completion APIs.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"

RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)


class LLMProvider(Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class LLMError(Exception):
    """Failure talking to an LLM provider."""

    def __init__(self, message: str, provider: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class LLMAuthenticationError(LLMError):
    pass


class LLMRateLimitError(LLMError):
    pass


@dataclass
class LLMRequest:
    """One system + user message exchange."""

    prompt: str
    system_prompt: Optional[str] = None
    max_tokens: int = 3000
    temperature: float = 0.3
    json_mode: bool = True


@dataclass
class LLMResponse:
    content: str
    model: str
    provider: LLMProvider
    tokens_used: Optional[int] = None
    finish_reason: Optional[str] = None
    raw_response: Dict[str, Any] = field(default_factory=dict)


class LLMClient:
    """
    Thin wrapper around one provider's completion endpoint.

    Rate limits (429) and server errors (500/502/503/504) are retried with
    exponential backoff; any other HTTP error is converted to an LLMError.
    """

    def __init__(
        self,
        provider: LLMProvider,
        api_key: str,
        model: str,
        timeout_seconds: int = 60,
        http_client: Optional[httpx.Client] = None,
    ):
        self.provider = provider
        self.api_key = api_key
        self.model = model
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def complete(self, request: LLMRequest, model: Optional[str] = None) -> LLMResponse:
        """
        Send a completion request.

        Raises:
            LLMAuthenticationError: If the API key is missing or rejected
            LLMRateLimitError: If the provider keeps rate limiting after retries
            LLMError: For any other transport or API failure
        """
        if not self.api_key or not self.api_key.strip():
            raise LLMAuthenticationError(
                f"API key not configured for {self.provider.value}",
                provider=self.provider.value,
            )

        try:
            return self._complete_with_retry(request, model or self.model)
        except httpx.HTTPStatusError as e:
            self._handle_http_error(e)
        except httpx.HTTPError as e:
            raise LLMError(f"HTTP error during {self.provider.value} request: {e}", provider=self.provider.value)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=60),
        retry=retry_if_exception_type(httpx.HTTPStatusError),
        reraise=True,
    )
    def _complete_with_retry(self, request: LLMRequest, model: str) -> LLMResponse:
        try:
            if self.provider == LLMProvider.ANTHROPIC:
                return self._anthropic_complete(request, model)
            return self._openai_complete(request, model)
        except httpx.HTTPStatusError as e:
            if e.response.status_code in RETRYABLE_STATUS_CODES:
                logger.warning(f"{self.provider.value} returned {e.response.status_code}, retrying")
                raise
            self._handle_http_error(e)

    def _handle_http_error(self, error: httpx.HTTPStatusError) -> None:
        status_code = error.response.status_code
        provider = self.provider.value
        logger.error(f"{provider} API error ({status_code}): {error.response.text[:500]}")

        if status_code == 401:
            raise LLMAuthenticationError(f"Authentication failed for {provider}", provider=provider)
        if status_code == 429:
            raise LLMRateLimitError(f"Rate limit exceeded for {provider}", provider=provider, status_code=429)
        raise LLMError(f"{provider} API error ({status_code})", provider=provider, status_code=status_code)

    def _openai_complete(self, request: LLMRequest, model: str) -> LLMResponse:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "content-type": "application/json",
        }
        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.prompt})

        body: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "presence_penalty": 0.1,
            "frequency_penalty": 0.1,
        }
        if request.json_mode:
            body["response_format"] = {"type": "json_object"}

        response = self._client.post(OPENAI_URL, headers=headers, json=body)
        response.raise_for_status()
        data = response.json()

        choices = data.get("choices") or []
        if not choices:
            raise LLMError("OpenAI API returned no choices", provider="openai")
        content = (choices[0].get("message") or {}).get("content")
        if not content:
            raise LLMError("OpenAI API returned empty content", provider="openai")

        tokens_used = (data.get("usage") or {}).get("total_tokens")
        logger.info(f"OpenAI usage: {tokens_used} tokens")
        return LLMResponse(
            content=content,
            model=data.get("model", model),
            provider=LLMProvider.OPENAI,
            tokens_used=tokens_used,
            finish_reason=choices[0].get("finish_reason"),
            raw_response=data,
        )

    def _anthropic_complete(self, request: LLMRequest, model: str) -> LLMResponse:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        body: Dict[str, Any] = {
            "model": model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "top_p": 0.9,
            "top_k": 250,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.system_prompt:
            body["system"] = request.system_prompt

        response = self._client.post(ANTHROPIC_URL, headers=headers, json=body)
        response.raise_for_status()
        data = response.json()

        text_blocks = [c.get("text", "") for c in data.get("content") or [] if c.get("type") == "text"]
        if not text_blocks:
            raise LLMError("Anthropic API returned no text content", provider="anthropic")

        usage = data.get("usage") or {}
        tokens_used = usage.get("input_tokens", 0) + usage.get("output_tokens", 0)
        logger.info(f"Anthropic usage: {tokens_used} tokens")
        return LLMResponse(
            content=text_blocks[0],
            model=data.get("model", model),
            provider=LLMProvider.ANTHROPIC,
            tokens_used=tokens_used,
            finish_reason=data.get("stop_reason"),
            raw_response=data,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
