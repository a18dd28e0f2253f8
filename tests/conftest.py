from __future__ import annotations

import pytest

from primality64 import runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Every test starts from default settings (no profile, debug off)."""
    runtime.reset()
    yield
    runtime.reset()
