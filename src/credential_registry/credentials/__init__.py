"""Pluggable credential resolution: provider interface, registry and providers."""

from credential_registry.credentials.base import (
    EXPIRATION_TIMESTAMP_PROPERTY_NAME,
    PASSWORD_PROPERTY_NAME,
    RESERVED_PROPERTY_NAMES,
    USER_PROPERTY_NAME,
    CallableCredentialsProvider,
    CredentialsProvider,
)
from credential_registry.credentials.registry import (
    CredentialsProviderRegistry,
    get_credentials,
    get_default_registry,
    register_provider,
    set_default_registry,
)
from credential_registry.credentials.providers import (
    EnvCredentialsProvider,
    StaticCredentialsProvider,
)
from credential_registry.credentials.vault import VaultCredentialsProvider
from credential_registry.credentials.aws import AWSSecretsCredentialsProvider
from credential_registry.credentials.http import HttpCredentialsProvider

__all__ = [
    "USER_PROPERTY_NAME",
    "PASSWORD_PROPERTY_NAME",
    "EXPIRATION_TIMESTAMP_PROPERTY_NAME",
    "RESERVED_PROPERTY_NAMES",
    "CredentialsProvider",
    "CallableCredentialsProvider",
    "CredentialsProviderRegistry",
    "get_default_registry",
    "set_default_registry",
    "register_provider",
    "get_credentials",
    "StaticCredentialsProvider",
    "EnvCredentialsProvider",
    "VaultCredentialsProvider",
    "AWSSecretsCredentialsProvider",
    "HttpCredentialsProvider",
]
