"""Expose the project root on sys.path for pytest runs."""

from __future__ import annotations

import sys

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stubwork.engine import ResolutionEngine  # noqa: E402
from stubwork.pytest_plugin import (  # noqa: E402,F401
    stub_engine,
    stubwork_settings,
)


@pytest.fixture()
def greet_engine(stub_engine: ResolutionEngine) -> ResolutionEngine:
    """Engine with a specific stub for Alice and a catch-all after it."""

    stub_engine.stub("greet").with_args("Alice").and_return("Hi Alice")
    stub_engine.stub("greet").and_return("Hi stranger")
    return stub_engine
