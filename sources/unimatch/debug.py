"""
Simple system to debug matching modules via process output messages
"""

from __future__ import annotations

import functools
import os

__all__ = ["check_debug_enabled"]

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@functools.cache
def check_debug_enabled() -> bool:
    """
    Check whether debugging is enabled by reading the environment
    variable ``UNIMATCH_DEBUG``.
    """
    return os.environ.get("UNIMATCH_DEBUG", "").strip().lower() in _TRUTHY
