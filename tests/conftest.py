"""
Shared pytest fixtures for funky tests.

This module provides:
- Settings cache isolation (FUNKY_* env vars are re-read per test)
- Logging reset so a test calling configure_logging() cannot leak its handler
- A call-counting stub for asserting short-circuit behaviour
"""

from pathlib import Path
from typing import Any, Generator

import pytest

from funky.core.logging import reset_logging
from funky.core.settings import get_settings


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if "unit" not in markers:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def clean_settings_and_logging(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Run each test from an empty directory (no stray .env) with fresh settings."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    reset_logging()
    yield
    get_settings.cache_clear()
    reset_logging()


class CallCounter:
    """Callable stub that records every call and returns a fixed value."""

    def __init__(self, returns: Any = None):
        self.returns = returns
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.returns

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def counter() -> CallCounter:
    """A fresh call-counting stub returning None."""
    return CallCounter()
