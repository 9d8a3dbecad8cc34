"""
HashiCorp Vault-backed credentials provider.

Two kinds of secrets are supported:

- static credentials stored in a KV v2 secret (``user``/``username``,
  ``password`` and any other fields, all returned)
- dynamic credentials generated by the database secrets engine, where every
  lookup creates a fresh lease

``hvac`` is only imported when the first client is built. If it is not
installed an informative ImportError is raised at that point.
"""

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from credential_registry.credentials.base import (
    EXPIRATION_TIMESTAMP_PROPERTY_NAME,
    CredentialsProvider,
    normalize_username,
)
from credential_registry.exceptions import CredentialsNotFoundError

logger = logging.getLogger(__name__)

LEASE_ID_PROPERTY_NAME = "lease-id"
LEASE_DURATION_PROPERTY_NAME = "lease-duration"


def _import_hvac():
    try:
        import hvac  # type: ignore[import]
    except ImportError as e:  # pragma: no cover - optional dependency
        raise ImportError(
            "VaultCredentialsProvider requires the 'hvac' package. "
            "Install with: pip install credential-registry[vault]"
        ) from e
    return hvac


def _is_invalid_path(error: Exception) -> bool:
    # Only consult hvac when it is already loaded; an injected client needs no install.
    hvac = sys.modules.get("hvac")
    invalid_path = getattr(getattr(hvac, "exceptions", None), "InvalidPath", None)
    return invalid_path is not None and isinstance(error, invalid_path)


class VaultCredentialsProvider(CredentialsProvider):
    """
    Resolve credentials from HashiCorp Vault.

    Names listed in ``database_roles`` are looked up through the database
    secrets engine (``<database_mount_point>/creds/<role>``); every other
    name is read as a KV v2 secret at ``kv_paths.get(name, name)``.

    Example:
        >>> provider = VaultCredentialsProvider(
        ...     "http://vault:8200",
        ...     token="s.xxx",
        ...     kv_paths={"orders-db": "apps/orders/db"},
        ...     database_roles={"reporting-db": "reporting-readonly"},
        ... )
        >>> registry.register("vault", provider)
        >>> registry.resolve("orders-db", provider_name="vault")
    """

    def __init__(
        self,
        vault_url: str,
        token: str,
        *,
        mount_point: str = "secret",
        kv_paths: Mapping[str, str] | None = None,
        database_mount_point: str = "database",
        database_roles: Mapping[str, str] | None = None,
        client: Any = None,
    ) -> None:
        """
        Args:
            vault_url: Base URL for the Vault server.
            token: Vault access token.
            mount_point: KV v2 mount point.
            kv_paths: Name to KV path overrides; unlisted names use the
                name itself as the path.
            database_mount_point: Mount point of the database secrets engine.
            database_roles: Name to database role for dynamic credentials.
            client: Pre-built ``hvac.Client``; built lazily when omitted.
        """
        self.vault_url = vault_url
        self.token = token
        self.mount_point = mount_point
        self.kv_paths = dict(kv_paths or {})
        self.database_mount_point = database_mount_point
        self.database_roles = dict(database_roles or {})
        self._client = client
        self._client_lock = threading.Lock()

    def _get_client(self):
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    hvac = _import_hvac()
                    self._client = hvac.Client(url=self.vault_url, token=self.token)
        return self._client

    def get_credentials(self, credentials_provider_name: str) -> Mapping[str, str]:
        role = self.database_roles.get(credentials_provider_name)
        if role is not None:
            return self._database_credentials(role)
        return self._kv_credentials(credentials_provider_name)

    def _kv_credentials(self, name: str) -> dict[str, str]:
        client = self._get_client()
        path = self.kv_paths.get(name, name)
        try:
            response = client.secrets.kv.v2.read_secret_version(
                path=path,
                mount_point=self.mount_point,
                raise_on_deleted_version=True,
            )
        except Exception as e:
            if _is_invalid_path(e):
                raise CredentialsNotFoundError(name, f"vault kv {self.mount_point}/{path}") from e
            raise

        # KV v2 layout: data -> data -> fields
        data = (response.get("data") or {}).get("data") or {}
        if not data:
            raise CredentialsNotFoundError(name, f"vault kv {self.mount_point}/{path}")
        logger.debug("Read Vault KV secret %s/%s", self.mount_point, path)
        return normalize_username(data)

    def _database_credentials(self, role: str) -> dict[str, str]:
        client = self._get_client()
        response = client.secrets.database.generate_credentials(
            name=role,
            mount_point=self.database_mount_point,
        )
        credentials = normalize_username(response.get("data") or {})

        lease_id = response.get("lease_id")
        lease_duration = response.get("lease_duration")
        if lease_id:
            credentials[LEASE_ID_PROPERTY_NAME] = str(lease_id)
        if lease_duration:
            credentials[LEASE_DURATION_PROPERTY_NAME] = str(lease_duration)
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=int(lease_duration))
            credentials[EXPIRATION_TIMESTAMP_PROPERTY_NAME] = expires_at.isoformat()

        logger.debug(
            "Generated Vault database credentials for role %s (lease %s)", role, lease_id
        )
        return credentials
