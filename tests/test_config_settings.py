import pytest
from pydantic import ValidationError

from chainlens.config import Settings


def test_google_api_key_fallback(monkeypatch):
    """GOOGLE_API_KEY is used when GEMINI_API_KEY is unset."""

    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

    settings = Settings()

    assert settings.gemini_api_key == "google-key"
    assert settings.has_gemini_key


def test_gemini_api_key_direct_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "primary-key")
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

    assert Settings().gemini_api_key == "primary-key"


def test_placeholder_keys_count_as_missing():
    settings = Settings(tatum_api_key="your_tatum_api_key_here", gemini_api_key="  ", llm_provider="google")

    assert not settings.has_tatum_key
    assert not settings.has_gemini_key
    assert not settings.has_llm_key


def test_supervisor_settings_from_env(monkeypatch):
    monkeypatch.setenv("HEALTH_CHECK_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("ENABLE_LLM_HEALTH_CHECK", "false")

    settings = Settings()

    assert settings.health_check_interval_seconds == 5.0
    assert settings.enable_llm_health_check is False
    assert settings.max_retries == 3


def test_max_retries_must_be_positive(monkeypatch):
    monkeypatch.setenv("MAX_RETRIES", "0")

    with pytest.raises(ValidationError):
        Settings()


def test_model_catalog_lookups():
    settings = Settings()

    assert settings.resolve_provider_for_model("Claude-Sonnet-4-20250514") == "anthropic"
    assert settings.resolve_provider_for_model("unknown") is None
    assert settings.resolve_default_model("gemini") == "gemini-2.5-flash"
