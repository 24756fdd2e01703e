"""
Pytest configuration and fixtures for the forum hook tests
"""

import os
import sys
from typing import Any

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from forum.config import Settings
from forum.hooks.registry import HookRegistry
from forum.hooks.relay import EventRelay


class Recorder:
    """Callable that records each call's positional arguments."""

    def __init__(self, returns: Any = None, log: list | None = None, label: str | None = None):
        self.calls: list[tuple[Any, ...]] = []
        self.returns = returns
        self.log = log
        self.label = label

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        if self.log is not None:
            self.log.append(self.label)
        return self.returns


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(extensions_config_file=str(tmp_path / "extensions_config.json"))


@pytest.fixture
def registry() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def relay(registry, settings) -> EventRelay:
    return EventRelay(registry=registry, settings=settings)


@pytest.fixture
def recorder():
    """Factory for Recorder instances."""
    return Recorder
