from __future__ import annotations
"""The single, non-generic error type that carries its own call history.

An :class:`Error` wraps any exception once, at the point where it first
crosses into helpful, and keeps three things from that moment:

* ``source``: the original exception (or a :class:`MessageError`)
* ``span_trace``: the instrumented frames active at wrap time, recent first
* ``backtrace``: the raw interpreter stack, when enabled

``str(err)`` is the short form (just the source message) so an Error can be
embedded in other messages.  ``err.render()`` is the full diagnostic meant to
be printed once, at the top of the program.
"""
import logging
from typing import Any, Optional, Type, TypeVar

from helpful.trace.backtrace import Backtrace
from helpful.trace.spans import SpanTrace

__all__ = ["Error", "MessageError", "CALL_HISTORY_HEADER", "BACKTRACE_HEADER"]

E = TypeVar("E", bound=BaseException)

CALL_HISTORY_HEADER = "Call history (recent first):"
BACKTRACE_HEADER = "Backtrace:"

logger = logging.getLogger(__name__)


class MessageError(Exception):
    """Source of an ad-hoc Error: a message with no concrete error type."""

    def __init__(self, message: Any):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return str(self.message)

    def __repr__(self) -> str:
        return repr(self.message)


class Error(Exception):
    """Type-erased error with a frozen call history and optional backtrace."""

    __slots__ = ("_source", "_span_trace", "_backtrace", "_frozen")

    def __init__(self, source: BaseException):
        if not isinstance(source, BaseException):
            raise TypeError(f"Error wraps exceptions, got {type(source).__name__}; use Error.from_message")
        if isinstance(source, Error):
            # Adopt the existing capture instead of wrapping twice.
            inner, span_trace, backtrace = source.source, source.span_trace, source.backtrace
        else:
            inner, span_trace, backtrace = source, SpanTrace.capture(), Backtrace.capture()
            logger.debug("captured %s with %d span(s)", type(inner).__name__, len(span_trace))
        super().__init__(inner)
        self._freeze(inner, span_trace, backtrace)

    def _freeze(self, source: BaseException, span_trace: SpanTrace, backtrace: Backtrace) -> None:
        object.__setattr__(self, "_source", source)
        object.__setattr__(self, "_span_trace", span_trace)
        object.__setattr__(self, "_backtrace", backtrace)
        object.__setattr__(self, "_frozen", True)
        self.__cause__ = source

    def __reduce__(self):
        # Copies and pickles keep the original capture.
        return (_restore, (type(self), self._source, self._span_trace, self._backtrace))

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def new(cls, source: BaseException) -> "Error":
        return cls(source)

    @classmethod
    def from_message(cls, message: Any) -> "Error":
        """Wrap *message* (anything with ``str``/``repr``) as an Error."""
        return cls(MessageError(message))

    @classmethod
    def wrap(cls, exc: BaseException) -> "Error":
        """Convert *exc* into an Error; an Error is returned unchanged."""
        if isinstance(exc, Error):
            return exc
        return cls(exc)

    # ------------------------------------------------------------------ #
    # Read-only state
    # ------------------------------------------------------------------ #

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False) and name in {
            "source",
            "span_trace",
            "backtrace",
            "_source",
            "_span_trace",
            "_backtrace",
            "_frozen",
        }:
            raise AttributeError(f"Error.{name} is read-only")
        super().__setattr__(name, value)

    @property
    def source(self) -> BaseException:
        return self._source

    @property
    def span_trace(self) -> SpanTrace:
        return self._span_trace

    @property
    def backtrace(self) -> Backtrace:
        return self._backtrace

    def downcast(self, cls: Type[E]) -> Optional[E]:
        """Return ``source`` if it is a *cls*, else ``None``."""
        return self._source if isinstance(self._source, cls) else None

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def __str__(self) -> str:
        return str(self._source)

    def __repr__(self) -> str:
        return f"Error({self._source!r})"

    def render(self) -> str:
        """Full diagnostic: message, call history and (if captured) backtrace."""
        message = str(self._source) or repr(self._source)
        out = f"{message}\n\n{CALL_HISTORY_HEADER}\n{self._span_trace}"
        if self._backtrace.captured:
            out += f"\n\n{BACKTRACE_HEADER}\n{self._backtrace}"
        return out


def _restore(cls: Type[Error], source: BaseException, span_trace: SpanTrace, backtrace: Backtrace) -> Error:
    err = cls.__new__(cls, source)
    Exception.__init__(err, source)
    err._freeze(source, span_trace, backtrace)
    return err
