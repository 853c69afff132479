"""Chat model providers and the factory the supervisor builds them with."""

from typing import Any, Dict, NamedTuple, Optional, Type

from .anthropic import AnthropicProvider
from .base import (
    LLMMessage,
    LLMProvider,
    LLMProviderAPIError,
    LLMProviderAuthError,
    LLMProviderError,
    LLMProviderRateLimitError,
    LLMResponse,
    ModelUnavailableError,
)
from .gemini import GeminiProvider


class ProviderEntry(NamedTuple):
    provider_class: Type[LLMProvider]
    display_name: str
    key_setting: str


PROVIDER_ALIAS_MAP: Dict[str, str] = {
    "google": "gemini",
    "claude": "anthropic",
}

PROVIDER_REGISTRY: Dict[str, ProviderEntry] = {
    "gemini": ProviderEntry(GeminiProvider, "Google Gemini", "gemini_api_key"),
    "anthropic": ProviderEntry(AnthropicProvider, "Anthropic Claude", "anthropic_api_key"),
}


def canonical_provider_name(name: str) -> str:
    return PROVIDER_ALIAS_MAP.get(name.lower(), name.lower())


def _configured_key(settings, provider: str) -> Optional[str]:
    entry = PROVIDER_REGISTRY.get(provider)
    if entry is None or not getattr(settings, f"has_{provider}_key", False):
        return None
    return getattr(settings, entry.key_setting)


class LLMProviderFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create_provider(provider_name: str, api_key: str, model: Optional[str] = None, **kwargs: Any) -> LLMProvider:
        provider_key = canonical_provider_name(provider_name)
        entry = PROVIDER_REGISTRY.get(provider_key)
        if entry is None:
            raise ValueError(
                f"Unsupported provider '{provider_name}'. "
                f"Available providers: {', '.join(PROVIDER_REGISTRY)}"
            )
        if not model:
            raise ValueError(f"No model provided for provider '{provider_key}'.")
        return entry.provider_class(api_key=api_key, model=model, **kwargs)


def get_llm_provider(provider_name: Optional[str] = None, model: Optional[str] = None, **kwargs: Any) -> LLMProvider:
    """Build the configured chat model client.

    The provider comes from ``provider_name``, else from the catalog entry
    of ``model``, else from ``settings.llm_provider``. A model that belongs
    to another provider is swapped for this provider's default.

    Raises ``ValueError`` when the provider is unknown or has no API key;
    the supervisor turns that into fallback mode.
    """
    from ...config import settings

    model_input = (model or "").strip() or None
    requested = (provider_name or "").strip() or None
    if requested is None and model_input:
        requested = settings.resolve_provider_for_model(model_input)
    provider = canonical_provider_name(requested or settings.llm_provider)

    api_key = _configured_key(settings, provider)
    if not api_key:
        raise ValueError(f"No API key configured for provider: {provider}")

    resolved_model = model_input or settings.llm_model
    if settings.resolve_provider_for_model(resolved_model) not in (None, provider):
        resolved_model = settings.resolve_default_model(provider)

    kwargs.setdefault("timeout", settings.llm_chat_timeout_seconds)
    kwargs.setdefault("max_tokens", settings.max_tokens)
    kwargs.setdefault("temperature", settings.temperature)
    return LLMProviderFactory.create_provider(provider, api_key=api_key, model=resolved_model, **kwargs)


def get_available_providers() -> Dict[str, Dict[str, Any]]:
    from ...config import settings

    return {
        name: {
            "display_name": entry.display_name,
            "default_model": settings.resolve_default_model(name),
            "configured": _configured_key(settings, name) is not None,
        }
        for name, entry in PROVIDER_REGISTRY.items()
    }


__all__ = [
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    "LLMProviderError",
    "LLMProviderAPIError",
    "LLMProviderAuthError",
    "LLMProviderRateLimitError",
    "ModelUnavailableError",
    "AnthropicProvider",
    "GeminiProvider",
    "LLMProviderFactory",
    "ProviderEntry",
    "get_available_providers",
    "get_llm_provider",
    "PROVIDER_REGISTRY",
    "canonical_provider_name",
]
