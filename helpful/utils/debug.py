"""Render captured span field values for the call history."""

import dataclasses
from enum import Enum
from pathlib import PurePath
from typing import Any, FrozenSet

from pydantic import BaseModel

__all__ = ["debug_repr"]


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _struct(name: str, items, seen: FrozenSet[int]) -> str:
    body = ", ".join(f"{key}: {_render(val, seen)}" for key, val in items)
    return f"{name} {{ {body} }}" if body else name


def _render(value: Any, seen: FrozenSet[int]) -> str:
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, PurePath):
        return _quote(str(value))
    if isinstance(value, Enum):
        return f"{type(value).__name__}::{value.name}"

    is_model = isinstance(value, BaseModel)
    is_dataclass = dataclasses.is_dataclass(value) and not isinstance(value, type)
    is_seq = isinstance(value, (list, tuple, set, frozenset))
    if not (is_model or is_dataclass or is_seq or isinstance(value, dict)):
        return repr(value)

    # Containers already on the render path print as a placeholder.
    if id(value) in seen:
        if is_model or is_dataclass:
            return f"{type(value).__name__} {{ ... }}"
        return "{...}" if isinstance(value, dict) else "[...]"
    seen = seen | {id(value)}

    if is_model:
        fields = type(value).model_fields
        return _struct(type(value).__name__, ((k, getattr(value, k)) for k in fields), seen)
    if is_dataclass:
        fields = dataclasses.fields(value)
        return _struct(type(value).__name__, ((f.name, getattr(value, f.name)) for f in fields), seen)
    if is_seq:
        return "[" + ", ".join(_render(v, seen) for v in value) + "]"
    return "{" + ", ".join(f"{_render(k, seen)}: {_render(v, seen)}" for k, v in value.items()) + "}"


def debug_repr(value: Any) -> str:
    """Return *value* as shown in a ``with name=value`` line.

    * strings and paths are double-quoted
    * pydantic models and dataclasses render as ``Name { field: value }``
    * sequences and mappings recurse into their items; a container that
      contains itself renders as ``[...]`` / ``{...}``
    * anything else falls back to ``repr()``

    Never raises: if rendering fails the plain ``repr()`` is used, and if that
    fails too a ``<unrepresentable Type>`` marker.
    """
    try:
        return _render(value, frozenset())
    except Exception:  # noqa: BLE001
        pass
    try:
        return repr(value)
    except Exception:  # noqa: BLE001
        return f"<unrepresentable {type(value).__name__}>"
