"""Raw interpreter backtrace captured when an Error is constructed."""

from __future__ import annotations

import inspect
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from helpful.settings import get_settings

__all__ = ["Backtrace", "BacktraceStatus"]

# Frames from these modules are construction plumbing, not the caller's stack.
_INTERNAL_MODULES = frozenset(
    {
        "helpful.trace.backtrace",
        "helpful.core.error",
        "helpful.core.make",
        "helpful.core.result",
        "helpful.core.termination",
    }
)


class BacktraceStatus(Enum):
    CAPTURED = "captured"
    UNSUPPORTED = "unsupported"
    DISABLED = "disabled"


@dataclass(frozen=True, slots=True)
class Backtrace:
    """Stack snapshot with a tri-state status; only ``CAPTURED`` has frames."""

    status: BacktraceStatus
    stack: Optional[traceback.StackSummary] = None

    @classmethod
    def disabled(cls) -> "Backtrace":
        return cls(BacktraceStatus.DISABLED)

    @classmethod
    def capture(cls, enabled: bool | None = None) -> "Backtrace":
        """Capture the caller's stack if enabled (``HELPFUL_BACKTRACE`` by default)."""
        if enabled is None:
            enabled = get_settings().backtrace
        if not enabled:
            return cls(BacktraceStatus.DISABLED)

        frame = inspect.currentframe()
        if frame is None:
            return cls(BacktraceStatus.UNSUPPORTED)
        try:
            while frame is not None and frame.f_globals.get("__name__") in _INTERNAL_MODULES:
                frame = frame.f_back
            stack = traceback.StackSummary.extract(traceback.walk_stack(frame))
        finally:
            del frame
        stack.reverse()
        return cls(BacktraceStatus.CAPTURED, stack)

    @property
    def captured(self) -> bool:
        return self.status is BacktraceStatus.CAPTURED

    def __str__(self) -> str:
        if not self.captured or self.stack is None:
            return ""
        return "".join(self.stack.format())
