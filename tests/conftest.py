import pytest

from helpful.settings import get_settings
from helpful.trace.spans import set_span_level


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("HELPFUL_BACKTRACE", "HELPFUL_SPAN_LEVEL", "HELPFUL_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    set_span_level(None)
    yield
    get_settings.cache_clear()
    set_span_level(None)
