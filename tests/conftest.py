"""
Root conftest.py: Shared fixtures for all tests.
"""

import pytest

from credential_registry.credentials import (
    CredentialsProvider,
    CredentialsProviderRegistry,
    StaticCredentialsProvider,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external services")


# ---------------------------------------------------------------------------
# Provider stubs
# ---------------------------------------------------------------------------


class RotatingProvider(CredentialsProvider):
    """Returns a new password on every call."""

    def __init__(self):
        self.calls = 0

    def get_credentials(self, credentials_provider_name):
        self.calls += 1
        return {"user": "rotating", "password": f"pw-{self.calls}"}


class FailingProvider(CredentialsProvider):
    """Raises the configured error on every call."""

    def __init__(self, error: Exception):
        self.error = error

    def get_credentials(self, credentials_provider_name):
        raise self.error


@pytest.fixture
def registry():
    """An empty registry."""
    return CredentialsProviderRegistry()


@pytest.fixture
def static_provider():
    """Static store with one database credential set."""
    return StaticCredentialsProvider({
        "orders-db": {"user": "orders", "password": "s3cret", "ssl-mode": "require"},
    })


@pytest.fixture
def rotating_provider():
    return RotatingProvider()


@pytest.fixture
def failing_provider_factory():
    def _make(error: Exception) -> FailingProvider:
        return FailingProvider(error)
    return _make
