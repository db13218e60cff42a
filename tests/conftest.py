"""Shared fixtures for the H3C supplicant tests."""

from __future__ import annotations

import signal
from collections.abc import Callable

import pytest

from h3c.core.engine_interface import EapolCallbacks, EapolEngine, EapolResult
from h3c.core.status import StatusCode


class FakeEngine(EapolEngine):
    """Scriptable engine recording every call made by the session."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.interface: str | None = None
        self.callbacks: EapolCallbacks | None = None
        self.init_result = EapolResult.OK
        self.start_result = EapolResult.OK
        # Each dispatch pops the next step; a step returns the dispatch result
        self.dispatch_steps: list[Callable[[], EapolResult]] = []

    def init(self, interface: str, callbacks: EapolCallbacks) -> EapolResult:
        self.calls.append("init")
        self.interface = interface
        self.callbacks = callbacks
        return self.init_result

    def start(self) -> EapolResult:
        self.calls.append("start")
        return self.start_result

    def dispatch(self) -> EapolResult:
        self.calls.append("dispatch")
        return self.dispatch_steps.pop(0)()

    def logoff(self) -> None:
        self.calls.append("logoff")

    def cleanup(self) -> None:
        self.calls.append("cleanup")


@pytest.fixture
def engine() -> FakeEngine:
    """Return a fresh fake engine."""
    return FakeEngine()


@pytest.fixture
def reported() -> list[StatusCode]:
    """Collect the status codes passed to the output sink."""
    return []


@pytest.fixture
def config_data(reported: list[StatusCode]) -> dict:
    """Return a minimal valid session configuration."""
    return {
        "interface": "eth0",
        "username": "alice",
        "password": "test",
        "output": reported.append,
    }


@pytest.fixture(autouse=True)
def restore_signal_handlers():
    """Undo the shutdown handlers a foreground run installs."""
    saved = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)
