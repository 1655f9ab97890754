"""
Shared pytest fixtures for the sensor advisor test suite.

Provides:
  - ``optimal_snapshot``: the dashboard's default readings; no rule fires.
  - ``stressed_snapshot``: dry soil, empty tank, heat, and low light.
  - ``partial_snapshot``: a snapshot with one absent reading.
  - ``advisor_config``: an enabled ``AdvisorConfig`` pointed at a fake host.
  - ``make_transport``: factory for ``httpx.MockTransport`` with a fixed reply.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from sensor_advisor.config import AdvisorConfig
from sensor_advisor.models.snapshot import ReadingSnapshot

FAKE_BASE_URL = "https://inference.test"


@pytest.fixture(autouse=True)
def _no_advisor_env(monkeypatch):
    """Keep host env vars from leaking into config / client tests."""
    for name in (
        "HF_API_TOKEN",
        "SENSOR_ADVISOR_LOG_LEVEL",
        "SENSOR_ADVISOR_DEBUG",
        "SENSOR_ADVISOR_ADVISOR_ENABLED",
        "SENSOR_ADVISOR_ADVISOR_URL",
        "SENSOR_ADVISOR_ADVISOR_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)


# ── Snapshots ─────────────────────────────────────────────────────────────────

@pytest.fixture
def optimal_snapshot() -> ReadingSnapshot:
    """Dashboard default readings - every advisory rule stays quiet."""
    return ReadingSnapshot(
        soil_moisture=65.4,
        temperature=24.8,
        humidity=58.2,
        water_level=78.9,
        rain=12.3,
        light=450,
    )


@pytest.fixture
def stressed_snapshot() -> ReadingSnapshot:
    """Dry soil, near-empty tank, heat stress, and low light all at once."""
    return ReadingSnapshot(
        soil_moisture=12.0,
        temperature=38.0,
        humidity=25.0,
        water_level=8.0,
        rain=5.0,
        light=150,
    )


@pytest.fixture
def partial_snapshot(optimal_snapshot) -> ReadingSnapshot:
    """Optimal readings except the rain sensor has not reported."""
    return optimal_snapshot.replace(rain=None)


# ── Advisor ───────────────────────────────────────────────────────────────────

@pytest.fixture
def advisor_config() -> AdvisorConfig:
    return AdvisorConfig(enabled=True, base_url=FAKE_BASE_URL, model="test/model")


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """Build a ``MockTransport`` that answers every request the same way.

    Pass ``json_body`` for a JSON reply, or ``exc`` to raise a transport error.
    Captured requests are appended to ``transport.requests``.
    """

    def _factory(
        json_body: Any = None,
        status_code: int = 200,
        exc: Exception | None = None,
    ) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if exc is not None:
                raise exc
            return httpx.Response(status_code, json=json_body)

        transport = httpx.MockTransport(handler)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return _factory
