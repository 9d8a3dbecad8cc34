"""
credential-registry - pluggable credential resolution.

Consumers that need a user and password (connection pools, API clients)
ask a registry for the credential set of a logical name instead of reading
static values from configuration. The registry dispatches to whichever
provider was registered under that name at start-up:
- static in-memory store and environment variables
- HashiCorp Vault (KV v2 and dynamic database credentials)
- AWS Secrets Manager
- plain HTTP secrets endpoints
- any function ``name -> {"user": ..., "password": ..., ...}``

Example:
    from credential_registry import CredentialsProviderRegistry

    registry = CredentialsProviderRegistry()

    @registry.provider("orders-db")
    def orders_db(name):
        return {"user": "orders", "password": rotate_password(name)}

    credentials = registry.resolve("orders-db")
    connect(user=credentials["user"], password=credentials["password"])
"""

__version__ = "0.1.0"

from credential_registry.credentials import (
    EXPIRATION_TIMESTAMP_PROPERTY_NAME,
    PASSWORD_PROPERTY_NAME,
    USER_PROPERTY_NAME,
    AWSSecretsCredentialsProvider,
    CallableCredentialsProvider,
    CredentialsProvider,
    CredentialsProviderRegistry,
    EnvCredentialsProvider,
    HttpCredentialsProvider,
    StaticCredentialsProvider,
    VaultCredentialsProvider,
    get_credentials,
    get_default_registry,
    register_provider,
)
from credential_registry.consumer import (
    ConnectionCredentials,
    ConsumerCredentialsConfig,
    apply_credentials,
    resolve_connection_credentials,
    split_credentials,
)
from credential_registry.exceptions import (
    ConfigError,
    CredentialsError,
    CredentialsNotFoundError,
    DuplicateNameError,
    ProviderLookupError,
    UnknownProviderError,
)

__all__ = [
    # Credentials
    "USER_PROPERTY_NAME",
    "PASSWORD_PROPERTY_NAME",
    "EXPIRATION_TIMESTAMP_PROPERTY_NAME",
    "CredentialsProvider",
    "CallableCredentialsProvider",
    "CredentialsProviderRegistry",
    "get_default_registry",
    "register_provider",
    "get_credentials",
    # Providers
    "StaticCredentialsProvider",
    "EnvCredentialsProvider",
    "VaultCredentialsProvider",
    "AWSSecretsCredentialsProvider",
    "HttpCredentialsProvider",
    # Consumer
    "ConsumerCredentialsConfig",
    "ConnectionCredentials",
    "split_credentials",
    "resolve_connection_credentials",
    "apply_credentials",
    # Exceptions
    "CredentialsError",
    "DuplicateNameError",
    "UnknownProviderError",
    "ProviderLookupError",
    "CredentialsNotFoundError",
    "ConfigError",
]
