"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import inspect
import os
import sys
from collections.abc import Iterator
from typing import Any

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from carbon_bytes.plugin import OperationalCarbonPlugin  # noqa: E402
from carbon_bytes.settings import CarbonBytesSettings  # noqa: E402
from carbon_bytes.types import ModelType  # noqa: E402

PER_BYTE_RESULT = 1.0
PER_VISIT_RESULT = 2.0
PER_VISIT_TRACE_RESULT = 3.0


class RecordingBackend:
    """Backend double returning a distinct value per operation."""

    def __init__(self, model_type: ModelType) -> None:
        self.model_type = model_type
        self.calls: list[tuple[Any, ...]] = []

    def per_byte(self, byte_count: float, green: bool = False) -> float:
        self.calls.append(("per_byte", byte_count, green))
        return PER_BYTE_RESULT

    def per_visit(self, byte_count: float, green: bool = False) -> float:
        self.calls.append(("per_visit", byte_count, green))
        return PER_VISIT_RESULT

    def per_visit_trace(
        self, byte_count: float, green: bool = False, options: Any = None
    ) -> dict[str, Any]:
        self.calls.append(("per_visit_trace", byte_count, green, options))
        return {"co2": PER_VISIT_TRACE_RESULT, "green": green, "variables": {}}


class RecordingFactory:
    """Backend factory remembering every backend it built."""

    def __init__(self) -> None:
        self.backends: list[RecordingBackend] = []

    def __call__(self, model_type: ModelType) -> RecordingBackend:
        backend = RecordingBackend(model_type)
        self.backends.append(backend)
        return backend

    @property
    def calls(self) -> list[tuple[Any, ...]]:
        return [call for backend in self.backends for call in backend.calls]


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "asyncio: mark test as requiring an event loop")


def pytest_pyfunc_call(pyfuncitem: Any) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames  # type: ignore[attr-defined]
        }

        event_loop = asyncio.new_event_loop()
        try:
            event_loop.run_until_complete(pyfuncitem.obj(**call_kwargs))
        finally:
            event_loop.close()
        return True
    return None


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep developer environment variables out of the tests."""

    for name in (
        "CARBON_BYTES_DEFAULT_MODEL",
        "CARBON_BYTES_LOG_LEVEL",
        "CARBON_BYTES_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def plugin(factory: RecordingFactory) -> OperationalCarbonPlugin:
    return OperationalCarbonPlugin(
        backend_factory=factory, settings=CarbonBytesSettings()
    )
