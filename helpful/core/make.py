from __future__ import annotations
"""Ad-hoc Error construction from a message.

```python
raise error("config has no timeout")            # literal, wrapped verbatim
raise error("bad port {}", port)                # formatted eagerly
bail("unknown backend {name!r}", name=backend)  # raise in one call
```
"""
from typing import Any, NoReturn

from helpful.core.error import Error

__all__ = ["error", "bail", "ensure"]


def error(message: Any, *args: Any, **kwargs: Any) -> Error:  # noqa: D401
    """Return an Error built from *message*.

    Without substitution arguments the message is used as-is and
    ``str.format`` is never called, so ``error("{x}")`` keeps its braces.
    """
    if not args and not kwargs:
        return Error.from_message(message)
    return Error.from_message(str(message).format(*args, **kwargs))


def bail(message: Any, *args: Any, **kwargs: Any) -> NoReturn:
    """Raise :func:`error` (*message*, ...)."""
    raise error(message, *args, **kwargs)


def ensure(condition: Any, message: Any, *args: Any, **kwargs: Any) -> None:
    """Raise :func:`error` (*message*, ...) unless *condition* is truthy."""
    if not condition:
        raise error(message, *args, **kwargs)
