"""
Consumer side of credential resolution.

Components that authenticate against a datastore or service (connection
pools, API clients) are configured with a ``credentials-provider`` name
instead of a static user and password. At connect time they resolve the
credential set, take ``user`` and ``password`` by reserved key, and forward
every other key verbatim to the lower-level client options:

    config = ConsumerCredentialsConfig.from_mapping({
        "credentials-provider": "orders-db",
        "credentials-provider-name": "vault",
    })
    creds = resolve_connection_credentials(registry, config)
    options = apply_credentials({"host": "db", "port": 5432}, creds)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from credential_registry.credentials.base import PASSWORD_PROPERTY_NAME, USER_PROPERTY_NAME
from credential_registry.credentials.registry import CredentialsProviderRegistry
from credential_registry.exceptions import ConfigError

CREDENTIALS_PROVIDER_KEY = "credentials-provider"
CREDENTIALS_PROVIDER_NAME_KEY = "credentials-provider-name"


@dataclass
class ConsumerCredentialsConfig:
    """
    Credentials settings of a single consumer.

    Attributes:
        credentials_provider: Logical credentials name passed to the provider.
        credentials_provider_name: Registered provider to use when one
            provider serves several logical names. Defaults to
            ``credentials_provider``.
    """
    credentials_provider: str
    credentials_provider_name: Optional[str] = None

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "ConsumerCredentialsConfig":
        """Build from already-parsed consumer settings."""
        name = settings.get(CREDENTIALS_PROVIDER_KEY)
        if not name:
            raise ConfigError(f"Consumer settings are missing '{CREDENTIALS_PROVIDER_KEY}'")
        return cls(
            credentials_provider=str(name),
            credentials_provider_name=settings.get(CREDENTIALS_PROVIDER_NAME_KEY) or None,
        )


@dataclass
class ConnectionCredentials:
    """Credential set split into reserved keys and pass-through extras."""
    user: Optional[str] = None
    password: Optional[str] = None
    extras: Dict[str, str] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, str]:
        out = dict(self.extras)
        if self.user is not None:
            out[USER_PROPERTY_NAME] = self.user
        if self.password is not None:
            out[PASSWORD_PROPERTY_NAME] = self.password
        return out


def split_credentials(
    credentials: Mapping[str, str],
) -> Tuple[Optional[str], Optional[str], Dict[str, str]]:
    """Return ``(user, password, extras)`` from a credential set."""
    extras = {
        k: v for k, v in credentials.items()
        if k not in (USER_PROPERTY_NAME, PASSWORD_PROPERTY_NAME)
    }
    return credentials.get(USER_PROPERTY_NAME), credentials.get(PASSWORD_PROPERTY_NAME), extras


def resolve_connection_credentials(
    registry: CredentialsProviderRegistry,
    config: ConsumerCredentialsConfig,
) -> ConnectionCredentials:
    """
    Resolve the consumer's credentials through ``registry``.

    Registry errors propagate unchanged. Their messages name both the
    provider and the consumer's credentials name, plus the underlying cause.
    """
    credentials = registry.resolve(
        config.credentials_provider,
        provider_name=config.credentials_provider_name,
    )
    user, password, extras = split_credentials(credentials)
    return ConnectionCredentials(user=user, password=password, extras=extras)


def apply_credentials(
    connection_options: Mapping[str, Any],
    credentials: ConnectionCredentials,
) -> Dict[str, Any]:
    """
    Return a copy of ``connection_options`` with the credentials applied.

    Resolved values override static ones; extras are added verbatim.
    """
    options = dict(connection_options)
    options.update(credentials.as_dict())
    return options
