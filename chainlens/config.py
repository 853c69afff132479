import os

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

_PLACEHOLDER_KEYS = {
    "",
    "your_tatum_api_key_here",
    "your_gemini_api_key_here",
    "your_anthropic_api_key_here",
}

_PROVIDER_ALIASES = {"google": "gemini", "claude": "anthropic"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Pick up the Google SDK's variable name when GEMINI_API_KEY is unset."""

        super().model_post_init(__context)

        if not self.gemini_api_key:
            fallback = os.getenv("GOOGLE_API_KEY")
            if fallback:
                object.__setattr__(self, "gemini_api_key", fallback)

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=3000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="auto", description="auto, json or console")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    # Tatum data API
    tatum_api_key: str = Field(default="", description="Tatum API key")
    tatum_api_url: str = Field(default="https://api.tatum.io/v3", description="Tatum v3 base URL (RPC gateway)")
    tatum_data_url: str = Field(default="https://api.tatum.io/v4", description="Tatum v4 base URL (data API)")
    request_timeout_seconds: int = Field(default=30, description="Upstream request timeout")

    # LLM Provider Settings
    llm_provider: str = Field(default="gemini", description="Default LLM provider")
    llm_model: str = Field(default="gemini-2.5-flash", description="Default LLM model")
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key",
        validation_alias=AliasChoices("gemini_api_key", "GEMINI_API_KEY"),
    )
    anthropic_api_key: str = Field(default="", description="Anthropic API key")
    max_tokens: int = Field(default=2048, description="Maximum tokens for LLM response")
    temperature: float = Field(default=0.4, description="LLM temperature setting")
    provider_models_catalog: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            "gemini": ["gemini-2.5-flash", "gemini-2.5-pro"],
            "anthropic": ["claude-sonnet-4-20250514", "claude-3-5-haiku-20241022"],
        },
        description="Known model ids per provider; the first one is the provider default",
    )

    # Connection supervisor
    enable_llm_health_check: bool = Field(default=True, description="Run the periodic model health probe")
    health_check_interval_seconds: float = Field(default=30.0, gt=0, description="Seconds between health probes")
    llm_probe_timeout_seconds: float = Field(default=20.0, gt=0, description="Timeout for a single model probe")
    llm_chat_timeout_seconds: float = Field(default=60.0, gt=0, description="Timeout for a single chat generation")
    max_retries: int = Field(default=3, ge=1, description="Failed generations tolerated before fallback")
    max_connection_attempts: int = Field(default=20, ge=1, description="Consecutive failed start attempts allowed")
    max_prompt_chars: int = Field(default=60000, ge=1000, description="Character budget for serialized wallet context")

    @staticmethod
    def _is_set(key: str) -> bool:
        return key.strip() not in _PLACEHOLDER_KEYS

    @property
    def has_tatum_key(self) -> bool:
        return self._is_set(self.tatum_api_key)

    @property
    def has_gemini_key(self) -> bool:
        return self._is_set(self.gemini_api_key)

    @property
    def has_anthropic_key(self) -> bool:
        return self._is_set(self.anthropic_api_key)

    @property
    def has_llm_key(self) -> bool:
        provider = _PROVIDER_ALIASES.get(self.llm_provider.lower(), self.llm_provider.lower())
        return bool(getattr(self, f"has_{provider}_key", False))

    def resolve_default_model(self, provider: str) -> str:
        models = self.provider_models_catalog.get(provider.lower()) or [self.llm_model]
        return models[0]

    def resolve_provider_for_model(self, model_id: str) -> Optional[str]:
        """Catalog provider owning ``model_id`` (case-insensitive), if any."""
        target = (model_id or "").strip().lower()
        owners = [
            provider
            for provider, models in self.provider_models_catalog.items()
            if target in (model.lower() for model in models)
        ]
        return owners[0] if target and owners else None


settings = Settings()
