# This file makes the 'utils' directory a Python package.

"""helpful utilities."""

from .debug import debug_repr

__all__ = [
    "debug_repr",
]
