from __future__ import annotations
"""Rich-backed logging setup for programs that report through helpful.

``init()`` plays the role of a tracing subscriber bootstrap: it installs a
:class:`rich.logging.RichHandler` on stderr and sets the minimum level at
which spans are recorded into call histories.
"""
from logging import Logger, getLogger, basicConfig, DEBUG, INFO, WARNING, ERROR, CRITICAL

from rich.console import Console
from rich.logging import RichHandler

from helpful.settings import get_settings
from helpful.trace.spans import set_span_level

__all__ = ["get", "init", "log"]

_LEVEL_MAP = {
    "debug": DEBUG,
    "info": INFO,
    "warning": WARNING,
    "error": ERROR,
    "critical": CRITICAL,
}

log: Logger = getLogger("helpful")

_configured = False


def get(level: str = "info") -> Logger:  # noqa: D401
    """Return the helpful logger set to *level* (str)."""
    lvl = _LEVEL_MAP.get(level.lower(), INFO)
    lg = getLogger("helpful")
    lg.setLevel(lvl)
    return lg


def init(level: str | None = None, span_level: str | None = None) -> Logger:
    """Configure the root logger once and apply level settings.

    Explicit arguments win over ``HELPFUL_LOG_LEVEL`` / ``HELPFUL_SPAN_LEVEL``.
    Calling it again only re-applies the levels.
    """
    global _configured
    settings = get_settings()
    if not _configured:
        basicConfig(
            level=INFO,
            format="%(message)s",
            datefmt="%H:%M:%S",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        )
        _configured = True

    set_span_level(span_level or settings.span_level)
    return get(level or settings.log_level)
