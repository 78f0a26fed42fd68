"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from wavefront_promql_proxy.backend import InMemoryQueryExecutor
from wavefront_promql_proxy.config import ProxySettings
from wavefront_promql_proxy.core.models import Query, RawSeries

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ProxySettings:
    return ProxySettings(wavefront_address="wavefront.example.com", wavefront_token="test-token")


@pytest.fixture
def query() -> Query:
    return Query(start=100.0, end=130.0, step=10.0, expression="ts(cpu.load)")


@pytest.fixture
def cpu_series() -> list[RawSeries]:
    return [
        RawSeries(
            label="cpu.load",
            host="web-02",
            tags={"env": "prod"},
            samples=((99.0, 0.5), (111.0, 1.0), (121.0, 1.25), (130.0, 1.5)),
        ),
        RawSeries(
            label="cpu.load",
            host="web-01",
            tags={"env": "prod"},
            samples=((100.0, 2.0), (110.0, 3.0)),
        ),
    ]


@pytest.fixture
def executor(cpu_series: list[RawSeries]) -> InMemoryQueryExecutor:
    return InMemoryQueryExecutor(cpu_series)
