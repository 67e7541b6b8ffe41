"""Shared pytest fixtures for QuantumSynth tests.

Provides explicit Settings values, a fresh MetricsRegistry, a dispatcher
with seeded random draws, and a TestClient over a freshly built app.
"""

from __future__ import annotations

import numpy as np
import pytest
from fastapi.testclient import TestClient

from quantumsynth.core.config import QuantumConfig, Settings
from quantumsynth.core.metrics import MetricsRegistry
from quantumsynth.main import create_app
from quantumsynth.synth.processor import QuantumDispatcher


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    """Settings with every section at its default."""
    return Settings()


@pytest.fixture
def metrics() -> MetricsRegistry:
    return MetricsRegistry()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dispatcher(settings: Settings, metrics: MetricsRegistry) -> QuantumDispatcher:
    """Dispatcher whose random draws repeat: every call uses seed 7."""
    return QuantumDispatcher(settings, metrics, rng_factory=lambda: np.random.default_rng(7))


@pytest.fixture
def entangled_settings() -> Settings:
    """Settings whose default mode is entanglement."""
    return Settings(quantum=QuantumConfig(default_mode="entanglement", max_jobs=4))


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
