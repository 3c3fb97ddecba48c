from __future__ import annotations
"""Instrumented call frames and the call-history snapshot.

Frames are pushed on entry to an instrumented function (or a ``span`` block)
and popped on exit.  The active stack lives in a :class:`ContextVar` holding
an immutable tuple, so every thread and asyncio task sees its own stack and
:meth:`SpanTrace.capture` is a point-in-time copy rather than a live view.

Example
-------
```python
from helpful.trace.spans import instrument, SpanTrace

@instrument(target="config")
def load(path):
    print(SpanTrace.capture())   # 0: config::load / with path="x.json"
```
"""

import functools
import inspect
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple, TypeVar

from helpful.settings import get_settings
from helpful.utils.debug import debug_repr

__all__ = [
    "SpanFrame",
    "SpanTrace",
    "instrument",
    "span",
    "set_span_level",
]

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)

# Outermost frame first; SpanTrace reverses on capture.
_ACTIVE: ContextVar[Tuple["SpanFrame", ...]] = ContextVar("helpful_active_spans", default=())

_span_level_override: Optional[int] = None


def _level_no(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown span level {level!r}")
    return value


def set_span_level(level: str | int | None) -> None:
    """Override the minimum recorded span level (``None`` restores settings)."""
    global _span_level_override
    _span_level_override = None if level is None else _level_no(level)


def _enabled(level: int) -> bool:
    threshold = _span_level_override
    if threshold is None:
        threshold = _level_no(get_settings().span_level)
    return level >= threshold


# --------------------------------------------------------------------------- #
# Snapshot types
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SpanFrame:
    """One instrumented frame: name, rendered fields and source location."""

    name: str
    fields: Tuple[Tuple[str, str], ...] = ()
    location: Optional[str] = None

    def render(self, index: int) -> str:
        out = f"{index:>4}: {self.name}\n"
        if self.fields:
            out += "        with " + " ".join(f"{k}={v}" for k, v in self.fields) + "\n"
        if self.location:
            out += f"          at {self.location}\n"
        return out


@dataclass(frozen=True, slots=True)
class SpanTrace:
    """Immutable call history, most recent frame first."""

    frames: Tuple[SpanFrame, ...] = ()

    @classmethod
    def capture(cls) -> "SpanTrace":
        """Copy the frames active in the current context (never fails)."""
        return cls(tuple(reversed(_ACTIVE.get())))

    @classmethod
    def empty(cls) -> "SpanTrace":
        return cls()

    def __iter__(self) -> Iterator[SpanFrame]:
        return iter(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    def __bool__(self) -> bool:
        return bool(self.frames)

    def __str__(self) -> str:
        return "".join(frame.render(i) for i, frame in enumerate(self.frames))


# --------------------------------------------------------------------------- #
# Recording
# --------------------------------------------------------------------------- #


def _render_fields(items: Iterable[Tuple[str, Any]]) -> Tuple[Tuple[str, str], ...]:
    return tuple((name, debug_repr(value)) for name, value in items)


@contextmanager
def _entered(frame: SpanFrame):
    token = _ACTIVE.set(_ACTIVE.get() + (frame,))
    logger.debug("enter %s", frame.name)
    try:
        yield frame
    finally:
        _ACTIVE.reset(token)
        logger.debug("exit %s", frame.name)


@contextmanager
def span(name: str, *, level: str | int = "INFO", location: str | None = None, **fields: Any):
    """Record an ad-hoc frame named *name* for the duration of the block."""
    if not _enabled(_level_no(level)):
        yield None
        return
    frame = SpanFrame(name=name, fields=_render_fields(fields.items()), location=location)
    with _entered(frame):
        yield frame


def instrument(
    target: str | Callable[..., Any] | None = None,
    *,
    name: str | None = None,
    level: str | int = "INFO",
    skip: Iterable[str] = (),
):
    """Decorator: record a frame for every call of the wrapped function.

    The frame is named ``"{target}::{name}"`` (module and function name by
    default) and carries every bound argument except those listed in *skip*.
    Works for plain and ``async`` functions; usable bare (``@instrument``) or
    with arguments (``@instrument(target="cli")``).
    """
    if callable(target):
        return instrument()(target)

    skipped = frozenset(skip)
    level_no = _level_no(level)

    def _decorator(func: F) -> F:
        sig = inspect.signature(func)
        code = getattr(inspect.unwrap(func), "__code__", None)
        location = f"{code.co_filename}:{code.co_firstlineno}" if code else None
        span_name = f"{target or func.__module__}::{name or func.__name__}"

        def _frame(args, kwargs) -> SpanFrame:
            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()
            items = ((k, v) for k, v in bound.arguments.items() if k not in skipped)
            return SpanFrame(name=span_name, fields=_render_fields(items), location=location)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def _async_wrapper(*args, **kwargs):
                if not _enabled(level_no):
                    return await func(*args, **kwargs)
                with _entered(_frame(args, kwargs)):
                    return await func(*args, **kwargs)

            return _async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def _wrapper(*args, **kwargs):
            if not _enabled(level_no):
                return func(*args, **kwargs)
            with _entered(_frame(args, kwargs)):
                return func(*args, **kwargs)

        return _wrapper  # type: ignore[return-value]

    return _decorator
