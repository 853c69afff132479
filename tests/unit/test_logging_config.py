import logging

from chainlens.logging_config import _use_console, add_service, redact_secrets


def test_provider_keys_are_masked():
    event = redact_secrets(None, "info", {"event": "probe", "api_key": "AIzaSyABCDEF", "chain": "ethereum"})

    assert event["api_key"] == "AIza***"
    assert event["chain"] == "ethereum"


def test_service_fields_are_added():
    event = add_service(None, "info", {"event": "x"})
    assert event["service"] == "chainlens"
    assert "version" in event


def test_renderer_choice():
    assert _use_console(logging.DEBUG, "auto")
    assert not _use_console(logging.INFO, "auto")
    assert _use_console(logging.INFO, "console")
    assert not _use_console(logging.DEBUG, "json")
