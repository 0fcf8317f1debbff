r"""
Common set-up for all tests.

Defines fixtures for seeded random data and for toggling debug output.
"""

from __future__ import annotations

import pytest
import torch

from unimatch import debug


@pytest.fixture()
def generator() -> torch.Generator:
    return torch.Generator().manual_seed(1337)


@pytest.fixture()
def debug_env(monkeypatch):
    """
    Set ``UNIMATCH_DEBUG`` for the duration of a test, e.g. ``debug_env("1")``.
    """

    def _set(value: str | None):
        if value is None:
            monkeypatch.delenv("UNIMATCH_DEBUG", raising=False)
        else:
            monkeypatch.setenv("UNIMATCH_DEBUG", value)
        debug.check_debug_enabled.cache_clear()

    yield _set

    debug.check_debug_enabled.cache_clear()
