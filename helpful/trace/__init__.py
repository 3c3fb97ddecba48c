"""Snapshot providers: instrumented call history and raw backtraces."""

from .spans import SpanFrame, SpanTrace, instrument, span, set_span_level
from .backtrace import Backtrace, BacktraceStatus

__all__ = [
    "SpanFrame",
    "SpanTrace",
    "instrument",
    "span",
    "set_span_level",
    "Backtrace",
    "BacktraceStatus",
]
