from __future__ import annotations
"""Result dataclass and the conversions that upgrade failures to ``Error``.

Two ways to cross into helpful:

* raising code: decorate with :func:`traced` (or use ``with traced():``) and
  any exception escaping it becomes an :class:`Error`, captured while the
  surrounding spans are still active;
* collected outcomes: :func:`capture` returns a :class:`Result`, and
  :meth:`Result.helpful` maps a native failure to an ``Error`` failure.

Stack ``@traced`` *below* ``@instrument`` so the function's own frame is part
of the captured call history.
"""
import functools
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from helpful.core.error import Error

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

__all__ = ["Result", "capture", "traced"]


@dataclass(slots=True)
class Result(Generic[T]):  # noqa: D101
    value: Optional[T] = None
    error: Optional[BaseException] = None

    # ------------------------------------------------------------------ #
    @property
    def ok(self) -> bool:  # noqa: D401
        """Return True when *error* is None."""
        return self.error is None

    # Convenience constructors ----------------------------------------- #
    @staticmethod
    def success(val: T) -> "Result[T]":  # noqa: D401
        return Result(value=val)

    @staticmethod
    def failure(err: BaseException) -> "Result[Any]":  # noqa: D401
        return Result(error=err)

    # Conversion to helpful.Error -------------------------------------- #
    def helpful(self) -> "Result[T]":
        """Return a Result whose failure, if any, is an :class:`Error`."""
        if self.error is None or isinstance(self.error, Error):
            return self
        return Result(value=self.value, error=Error.wrap(self.error))

    traced = helpful

    # ------------------------------------------------------------------ #
    def unwrap(self) -> T:  # noqa: D401
        """Return *value* or raise *error* if present (Rust-like)."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return default if self.error is not None else self.value  # type: ignore[return-value]


def capture(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Call *fn* and return its outcome as a Result instead of raising."""
    try:
        return Result.success(fn(*args, **kwargs))
    except Exception as exc:  # noqa: BLE001
        return Result.failure(exc)


class _Traced:
    """Convert exceptions escaping a block or function into ``Error``."""

    def __enter__(self) -> "_Traced":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is None or isinstance(exc, Error) or not isinstance(exc, Exception):
            return False
        raise Error.wrap(exc) from exc

    def __call__(self, func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def _async_wrapper(*args, **kwargs):
                with _Traced():
                    return await func(*args, **kwargs)

            return _async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def _wrapper(*args, **kwargs):
            with _Traced():
                return func(*args, **kwargs)

        return _wrapper  # type: ignore[return-value]


def traced(func: F | None = None):
    """Use as ``@traced``, ``@traced()`` or ``with traced():``."""
    if func is None:
        return _Traced()
    return _Traced()(func)
