"""helpful: errors that remember where they came from.

Main components:
* `Error`: single error type carrying the captured call history
* `traced` / `Result.helpful`: convert any exception into an `Error`
* `instrument` / `span`: record the frames that make up the call history
* `error` / `bail` / `ensure`: ad-hoc errors from a message
* `MainResult` / `main`: report the final outcome and exit
"""

# Version info
__version__ = "0.1.0"

# Core components
from helpful.core.error import Error, MessageError
from helpful.core.result import Result, capture, traced
from helpful.core.make import error, bail, ensure
from helpful.core.termination import MainResult, main, EXIT_SUCCESS, EXIT_FAILURE

# Collaborators
from helpful.trace.spans import SpanFrame, SpanTrace, instrument, span
from helpful.trace.backtrace import Backtrace, BacktraceStatus
from helpful.settings import Settings, get_settings

# Export all important symbols
__all__ = [
    # Core classes
    "Error",
    "MessageError",
    "Result",
    "MainResult",

    # Functions
    "capture",
    "traced",
    "error",
    "bail",
    "ensure",
    "main",
    "instrument",
    "span",
    "get_settings",

    # Snapshots
    "SpanFrame",
    "SpanTrace",
    "Backtrace",
    "BacktraceStatus",

    # Config classes
    "Settings",

    "EXIT_SUCCESS",
    "EXIT_FAILURE",
]
