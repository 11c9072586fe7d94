"""Pytest configuration for the leadscope test suite."""

from __future__ import annotations

import pytest

from leadscope.core.config import settings
from leadscope.core.monitoring import MetricsCollector, configure_metrics_collector


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--leadscope-run-integration",
        action="store_true",
        default=False,
        help="Run leadscope integration tests that call the live FDIC and NCUA APIs.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: marks leadscope tests requiring network access",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--leadscope-run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --leadscope-run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def isolated_metrics() -> MetricsCollector:
    """Give every test its own metrics registry."""

    collector = MetricsCollector()
    configure_metrics_collector(collector)
    yield collector
    configure_metrics_collector(None)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep tests away from the user's config file and LEADSCOPE_* variables."""

    for name in (
        "LEADSCOPE_API_URL",
        "LEADSCOPE_FDIC_URL",
        "LEADSCOPE_NCUA_ENDPOINTS",
        "LEADSCOPE_PROVIDER_TIMEOUT",
        "LEADSCOPE_RESULT_LIMIT",
        "LEADSCOPE_OVERRIDES_PATH",
        "LEADSCOPE_OVERRIDES_NAMESPACE",
        "LEADSCOPE_CACHE_TTL",
        "LEADSCOPE_LOGGING_LEVEL",
        "LEADSCOPE_LOGGING_FILE",
        "LEADSCOPE_HOST",
        "LEADSCOPE_PORT",
        "LEADSCOPE_RELOAD",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings, "DEFAULT_HOME", tmp_path)
