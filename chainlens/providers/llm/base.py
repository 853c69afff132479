import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class LLMProviderError(Exception):
    """Base exception for LLM provider errors"""

    retryable = False

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class LLMProviderRateLimitError(LLMProviderError):
    """Raised when hitting rate limits"""

    retryable = True


class LLMProviderAuthError(LLMProviderError):
    """Raised when the API key is rejected"""


class LLMProviderAPIError(LLMProviderError):
    """Raised when the request fails upstream or in transit"""

    retryable = True


class ModelUnavailableError(LLMProviderError):
    """Raised when no model client is connected"""


class LLMMessage(BaseModel):
    """One chat turn; ``role`` is system, user or assistant."""
    role: str
    content: str


class LLMResponse(BaseModel):
    content: str = ""
    provider: Optional[str] = None
    model: Optional[str] = None
    tokens_used: Optional[int] = None
    finish_reason: Optional[str] = None
    response_time_ms: Optional[float] = None


class LLMProvider(ABC):
    """Hosted chat model behind a single request/response call.

    Subclasses build their HTTP or SDK client in ``_setup_client`` and map
    transport failures onto the ``LLMProviderError`` family.
    """

    name: str = "llm"

    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs
    ):
        self.api_key = api_key
        self.model = model
        # Defaults for calls that do not pass their own.
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.logger = logging.getLogger(f"chainlens.llm.{self.name}")
        self._setup_client(**kwargs)

    @abstractmethod
    def _setup_client(self, **kwargs) -> None:
        ...

    @abstractmethod
    async def generate_response(
        self,
        messages: List[LLMMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs
    ) -> LLMResponse:
        """Return the model's reply to ``messages``. No streaming."""

    async def generate_text(self, prompt: str, **kwargs) -> str:
        """Send one user turn and return the reply text."""
        kwargs.setdefault("max_tokens", self.max_tokens)
        kwargs.setdefault("temperature", self.temperature)
        response = await self.generate_response([LLMMessage(role="user", content=prompt)], **kwargs)
        if not response.content:
            raise LLMProviderError(f"{self.name} returned an empty response", provider=self.name)
        self.logger.debug(
            "%s/%s replied in %.0f ms", self.name, self.model, response.response_time_ms or 0
        )
        return response.content

    async def health_check(self) -> Dict[str, Any]:
        try:
            reply = await self.generate_text("ping", max_tokens=8, temperature=0.0)
        except LLMProviderError as exc:
            return {
                "status": "degraded" if exc.retryable else "error",
                "provider": self.name,
                "model": self.model,
                "error": str(exc),
            }
        return {"status": "healthy", "provider": self.name, "model": self.model, "response_preview": reply[:32]}

    async def close(self) -> None:
        return None

    def _create_response(self, content: str, started: Optional[float] = None, **metadata) -> LLMResponse:
        if started is not None:
            metadata["response_time_ms"] = (time.perf_counter() - started) * 1000
        return LLMResponse(content=content, provider=self.name, model=self.model, **metadata)
