"""
Unit tests for AWSSecretsCredentialsProvider with a mocked secretsmanager client.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from credential_registry.credentials import (
    AWSSecretsCredentialsProvider,
    CredentialsProviderRegistry,
)
from credential_registry.exceptions import CredentialsNotFoundError, ProviderLookupError


class ResourceNotFoundException(Exception):
    pass


@pytest.fixture
def client():
    c = MagicMock()
    c.exceptions.ResourceNotFoundException = ResourceNotFoundException
    return c


@pytest.mark.unit
def test_aws_provider_creation():
    p = AWSSecretsCredentialsProvider(region_name="us-east-1", prefix="prod/")
    assert p.region_name == "us-east-1"
    assert p.prefix == "prod/"
    assert p.secret_id_for("orders-db") == "prod/orders-db"


@pytest.mark.unit
def test_aws_explicit_secret_id():
    p = AWSSecretsCredentialsProvider(prefix="prod/", secret_ids={"orders-db": "rds!cluster-1"})
    assert p.secret_id_for("orders-db") == "rds!cluster-1"


@pytest.mark.unit
def test_aws_client_built_lazily():
    pytest.importorskip("boto3")
    p = AWSSecretsCredentialsProvider(region_name="eu-west-1")
    with patch("boto3.client") as boto_client:
        boto_client.return_value.get_secret_value.return_value = {
            "SecretString": json.dumps({"username": "a", "password": "b"})
        }
        p.get_credentials("db")
        p.get_credentials("db")
    boto_client.assert_called_once_with("secretsmanager", region_name="eu-west-1")


@pytest.mark.unit
def test_aws_json_secret(client):
    client.get_secret_value.return_value = {
        "SecretString": json.dumps({
            "username": "orders",
            "password": "s3cret",
            "host": "orders.cluster.local",
            "port": 5432,
        }),
        "VersionId": "v1",
    }
    p = AWSSecretsCredentialsProvider(prefix="prod/", client=client)
    creds = p.get_credentials("orders-db")
    client.get_secret_value.assert_called_once_with(SecretId="prod/orders-db")
    assert creds == {
        "user": "orders",
        "password": "s3cret",
        "host": "orders.cluster.local",
        "port": "5432",
    }


@pytest.mark.unit
def test_aws_binary_secret(client):
    client.get_secret_value.return_value = {
        "SecretBinary": json.dumps({"user": "a", "password": "b"}).encode("utf-8"),
    }
    creds = AWSSecretsCredentialsProvider(client=client).get_credentials("db")
    assert creds == {"user": "a", "password": "b"}


@pytest.mark.unit
def test_aws_secret_not_found(client):
    client.get_secret_value.side_effect = ResourceNotFoundException("gone")
    with pytest.raises(CredentialsNotFoundError):
        AWSSecretsCredentialsProvider(client=client).get_credentials("db")


@pytest.mark.unit
def test_aws_non_json_secret_is_lookup_error(client):
    client.get_secret_value.return_value = {"SecretString": "plain-password"}
    registry = CredentialsProviderRegistry()
    registry.register("aws", AWSSecretsCredentialsProvider(client=client))
    with pytest.raises(ProviderLookupError) as exc_info:
        registry.resolve("db", provider_name="aws")
    assert isinstance(exc_info.value.cause, ValueError)


@pytest.mark.unit
def test_aws_json_array_rejected(client):
    client.get_secret_value.return_value = {"SecretString": "[1, 2]"}
    with pytest.raises(ValueError):
        AWSSecretsCredentialsProvider(client=client).get_credentials("db")
