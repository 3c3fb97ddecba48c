from __future__ import annotations
"""Program-entry adapter: turn a final outcome into an exit code.

```python
@helpful.main
def run() -> None:
    Cli.parse().run()
```

On failure the full diagnostic (message, call history, backtrace) is written
to stderr once and the process exits with ``EXIT_FAILURE``.
"""
import functools
import sys
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TextIO, TypeVar

from rich.console import Console

from helpful.core.error import Error
from helpful.core.result import Result

T = TypeVar("T")

__all__ = ["MainResult", "main", "EXIT_SUCCESS", "EXIT_FAILURE"]

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# Resolves sys.stderr on every write, so redirected streams are honoured.
# The report is written to its file verbatim, bypassing rich rendering.
console = Console(stderr=True, highlight=False, emoji=False, markup=False, soft_wrap=True)


def _success_code(value: Any) -> int:
    if value is None:
        return EXIT_SUCCESS
    if isinstance(value, bool):
        return EXIT_SUCCESS if value else EXIT_FAILURE
    if isinstance(value, int):
        return value
    report = getattr(value, "report", None)
    if callable(report):
        return report()
    return EXIT_SUCCESS


@dataclass(frozen=True, slots=True)
class MainResult(Generic[T]):
    """Either a terminable success value or an :class:`Error`."""

    value: Optional[T] = None
    error: Optional[Error] = None

    @classmethod
    def ok(cls, value: T = None) -> "MainResult[T]":  # type: ignore[assignment]
        return cls(value=value)

    @classmethod
    def err(cls, error: BaseException) -> "MainResult[Any]":
        return cls(error=Error.wrap(error))

    @classmethod
    def from_result(cls, result: Result[T]) -> "MainResult[T]":
        if result.error is not None:
            return cls.err(result.error)
        return cls.ok(result.value)

    @classmethod
    def from_call(cls, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "MainResult[T]":
        """Run *fn*, converting any escaping ``Exception`` into the failure branch."""
        try:
            return cls.ok(fn(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001
            return cls.err(exc)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def report(self, stream: TextIO | None = None) -> int:
        """Return the exit code; on failure print the full diagnostic first."""
        if self.error is None:
            return _success_code(self.value)
        rendered = self.error.render()
        out = console.file if stream is None else stream
        out.write(rendered + "\n")
        out.flush()
        return EXIT_FAILURE


def main(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator: run *fn* as the program entry point and exit with its code."""

    @functools.wraps(fn)
    def _entry(*args: Any, **kwargs: Any):
        code = MainResult.from_call(fn, *args, **kwargs).report()
        sys.exit(code)

    return _entry
