"""
Unit tests for VaultCredentialsProvider with an injected client when the
hvac package cannot be imported.
"""

import sys
from unittest.mock import MagicMock

import pytest

from credential_registry.credentials import VaultCredentialsProvider


@pytest.fixture
def no_hvac(monkeypatch):
    # A None entry makes ``import hvac`` raise ImportError.
    monkeypatch.setitem(sys.modules, "hvac", None)


@pytest.mark.unit
def test_injected_client_kv_read(no_hvac):
    client = MagicMock()
    client.secrets.kv.v2.read_secret_version.return_value = {
        "data": {"data": {"username": "orders", "password": "s3cret"}}
    }
    p = VaultCredentialsProvider("http://vault:8200", "s.xxx", client=client)
    assert p.get_credentials("orders-db") == {"user": "orders", "password": "s3cret"}


@pytest.mark.unit
def test_injected_client_errors_propagate(no_hvac):
    client = MagicMock()
    client.secrets.kv.v2.read_secret_version.side_effect = ConnectionError("sealed")
    p = VaultCredentialsProvider("http://vault:8200", "s.xxx", client=client)
    with pytest.raises(ConnectionError, match="sealed"):
        p.get_credentials("orders-db")


@pytest.mark.unit
def test_building_a_client_still_needs_hvac(no_hvac):
    p = VaultCredentialsProvider("http://vault:8200", "s.xxx")
    with pytest.raises(ImportError, match="credential-registry\\[vault\\]"):
        p.get_credentials("orders-db")
