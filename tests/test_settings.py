import logging

import pytest

from helpful import Error, SpanTrace, instrument
from helpful.settings import Settings, get_settings


def test_defaults():
    settings = get_settings()
    assert settings.backtrace is False
    assert settings.span_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HELPFUL_BACKTRACE", "1")
    monkeypatch.setenv("HELPFUL_SPAN_LEVEL", "debug")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.backtrace is True
    assert settings.span_level == "DEBUG"
    assert get_settings() is settings


@pytest.mark.parametrize(
    "raw, expected",
    [("full", True), ("1", True), ("yes", True), ("0", False), ("false", False), ("", False)],
)
def test_backtrace_toggle_is_lenient(monkeypatch, raw, expected):
    monkeypatch.setenv("HELPFUL_BACKTRACE", raw)
    assert Settings().backtrace is expected


def test_error_builds_with_rust_style_toggle(monkeypatch):
    monkeypatch.setenv("HELPFUL_BACKTRACE", "full")
    get_settings.cache_clear()

    err = Error(RuntimeError("boom"))
    assert str(err) == "boom"
    assert err.backtrace.captured


def test_unknown_level_falls_back_to_info(monkeypatch, caplog):
    monkeypatch.setenv("HELPFUL_LOG_LEVEL", "loud")
    with caplog.at_level(logging.WARNING, logger="helpful.settings"):
        settings = Settings()
    assert settings.log_level == "INFO"
    assert "unknown level 'loud'" in caplog.text


def test_unknown_span_level_keeps_instrumented_calls_working(monkeypatch):
    monkeypatch.setenv("HELPFUL_SPAN_LEVEL", "trace")
    get_settings.cache_clear()

    @instrument(target="jobs")
    def job():
        return SpanTrace.capture()

    assert [f.name for f in job()] == ["jobs::job"]
