"""
Unit tests for HttpCredentialsProvider with a mocked requests session.
"""

from unittest.mock import MagicMock

import pytest
import requests

from credential_registry.credentials import CredentialsProviderRegistry, HttpCredentialsProvider
from credential_registry.exceptions import CredentialsNotFoundError, ProviderLookupError


def _response(status_code=200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.mark.unit
def test_http_url_for():
    p = HttpCredentialsProvider("https://secrets.local/", path_template="/v1/creds/{name}")
    assert p.url_for("orders-db") == "https://secrets.local/v1/creds/orders-db"


@pytest.mark.unit
def test_http_get_credentials(session):
    session.get.return_value = _response(payload={"username": "orders", "password": "s3cret"})
    p = HttpCredentialsProvider("https://secrets.local", token="tok", timeout=2.0, session=session)
    creds = p.get_credentials("orders-db")
    assert creds == {"user": "orders", "password": "s3cret"}
    session.get.assert_called_once_with(
        "https://secrets.local/orders-db",
        headers={"Accept": "application/json", "Authorization": "Bearer tok"},
        timeout=2.0,
    )


@pytest.mark.unit
def test_http_no_token_no_auth_header(session):
    session.get.return_value = _response(payload={"user": "a", "password": "b"})
    HttpCredentialsProvider("https://secrets.local", session=session).get_credentials("db")
    headers = session.get.call_args.kwargs["headers"]
    assert "Authorization" not in headers


@pytest.mark.unit
def test_http_404_not_found(session):
    session.get.return_value = _response(status_code=404)
    with pytest.raises(CredentialsNotFoundError):
        HttpCredentialsProvider("https://secrets.local", session=session).get_credentials("db")


@pytest.mark.unit
def test_http_server_error_wrapped(session):
    session.get.return_value = _response(status_code=503)
    registry = CredentialsProviderRegistry()
    registry.register("http", HttpCredentialsProvider("https://secrets.local", session=session))
    with pytest.raises(ProviderLookupError) as exc_info:
        registry.resolve("db", provider_name="http")
    assert isinstance(exc_info.value.cause, requests.HTTPError)


@pytest.mark.unit
def test_http_non_object_payload(session):
    session.get.return_value = _response(payload=["a", "b"])
    with pytest.raises(ValueError):
        HttpCredentialsProvider("https://secrets.local", session=session).get_credentials("db")
