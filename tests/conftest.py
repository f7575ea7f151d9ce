"""Shared fixtures for all tests."""

from collections.abc import Generator

import pytest
import respx

from helpers import PACKAGES, SERVICE_URL, FakePackageServer


@pytest.fixture(autouse=True)
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear Pulsar-related environment variables for testing.

    This ensures tests don't accidentally use real credentials from the environment.
    """
    for var in ("PULSAR_ADMIN_URL", "PULSAR_AUTH_TOKEN", "DEBUG"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def service_url() -> str:
    return SERVICE_URL


@pytest.fixture
def api_mock() -> Generator[respx.MockRouter, None, None]:
    """Mock admin API; routes are registered by each test."""
    with respx.mock(assert_all_called=False, base_url=SERVICE_URL + PACKAGES) as mock:
        yield mock


@pytest.fixture
def package_server() -> FakePackageServer:
    return FakePackageServer()
