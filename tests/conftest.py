"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`worldsim` package without requiring an editable install in CI.  It also
provides a scripted random source so tests can force specific branches.
"""

import sys
from collections.abc import Sequence
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


class ScriptedRandom:
    """Random source replaying a fixed sequence of draws (cycled)."""

    def __init__(self, values: Sequence[float]) -> None:
        if not values:
            raise ValueError("values cannot be empty")
        self._values = list(values)
        self._index = 0
        self.calls = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        self.calls += 1
        return value

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.random()


@pytest.fixture
def scripted_random():
    """Factory fixture: ``scripted_random(0.1, 0.9)``."""

    def _make(*values: float) -> ScriptedRandom:
        return ScriptedRandom(values)

    return _make
