"""pytest fixtures giving each test its own resolution engine."""

from __future__ import annotations

from typing import Iterator

import pytest

from stubwork.configuration import StubworkSettings, settings_from_env
from stubwork.engine import ResolutionEngine


@pytest.fixture(scope="session")
def stubwork_settings() -> StubworkSettings:
    """Settings read once per session from ``STUBWORK_*`` variables."""

    return settings_from_env()


@pytest.fixture()
def stub_engine(
    stubwork_settings: StubworkSettings,
) -> Iterator[ResolutionEngine]:
    """A fresh engine per test; stubs never leak between tests."""

    engine = ResolutionEngine(settings=stubwork_settings)
    yield engine
    engine.reset()
    engine.close()
