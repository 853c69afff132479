import time
from typing import List, Dict, Any, Optional

import anthropic
from anthropic import AsyncAnthropic

from .base import (
    LLMProvider, LLMMessage, LLMResponse,
    LLMProviderAPIError, LLMProviderAuthError, LLMProviderRateLimitError,
)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM Provider implementation"""

    name = "anthropic"

    def __init__(self, api_key: str, model: Optional[str] = None, **kwargs):
        if not model:
            raise ValueError("AnthropicProvider requires a model to be specified")
        super().__init__(api_key, model, **kwargs)

    def _setup_client(self, **kwargs) -> None:
        self.client = AsyncAnthropic(api_key=self.api_key, timeout=kwargs.get("timeout", 60.0))

    def _split_messages(self, messages: List[LLMMessage]) -> tuple[Optional[str], List[Dict[str, Any]]]:
        system_parts = [msg.content for msg in messages if msg.role == "system"]
        converted = [
            {"role": "assistant" if msg.role == "assistant" else "user", "content": msg.content}
            for msg in messages
            if msg.role != "system"
        ]
        return ("\n\n".join(system_parts) or None), converted

    async def generate_response(
        self,
        messages: List[LLMMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs
    ) -> LLMResponse:
        started = time.perf_counter()
        system_prompt, anthropic_messages = self._split_messages(messages)

        request: Dict[str, Any] = {
            "model": self.model,
            "messages": anthropic_messages,
            "max_tokens": max_tokens or self.max_tokens or 1024,
        }
        if system_prompt:
            request["system"] = system_prompt
        if temperature is None:
            temperature = self.temperature
        if temperature is not None:
            request["temperature"] = temperature

        try:
            response = await self.client.messages.create(**request)
        except anthropic.AuthenticationError as e:
            raise LLMProviderAuthError(f"Anthropic authentication failed: {e}", provider=self.name) from e
        except anthropic.RateLimitError as e:
            raise LLMProviderRateLimitError(f"Anthropic rate limit exceeded: {e}", provider=self.name) from e
        except anthropic.APIError as e:
            raise LLMProviderAPIError(f"Anthropic API error: {e}", provider=self.name) from e

        text = "".join(block.text for block in response.content if getattr(block, "type", None) == "text")
        usage = getattr(response, "usage", None)
        tokens_used = (usage.input_tokens + usage.output_tokens) if usage else None

        return self._create_response(
            content=text,
            started=started,
            tokens_used=tokens_used,
            finish_reason=response.stop_reason,
        )

    async def close(self) -> None:
        await self.client.close()
