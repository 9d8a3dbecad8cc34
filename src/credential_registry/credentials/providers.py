"""
In-process credentials providers: static store and environment variables.
"""

from __future__ import annotations

import os
import re
import threading
from typing import Mapping

from credential_registry.credentials.base import (
    PASSWORD_PROPERTY_NAME,
    RESERVED_PROPERTY_NAMES,
    USER_PROPERTY_NAME,
    CredentialsProvider,
)
from credential_registry.exceptions import CredentialsNotFoundError


class StaticCredentialsProvider(CredentialsProvider):
    """
    Credentials held in memory, keyed by name.

    Useful for tests and for credentials already loaded by the application's
    own configuration layer. ``update`` swaps a set atomically, which is how
    rotation is modelled.
    """

    def __init__(self, credentials: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._credentials: dict[str, dict[str, str]] = {
            name: dict(values) for name, values in (credentials or {}).items()
        }
        self._lock = threading.Lock()

    def update(self, name: str, values: Mapping[str, str]) -> None:
        """Replace the credential set stored for ``name``."""
        with self._lock:
            self._credentials[name] = dict(values)

    def remove(self, name: str) -> None:
        with self._lock:
            self._credentials.pop(name, None)

    def get_credentials(self, credentials_provider_name: str) -> Mapping[str, str]:
        with self._lock:
            values = self._credentials.get(credentials_provider_name)
            if values is None:
                raise CredentialsNotFoundError(credentials_provider_name, "static store")
            return dict(values)


_ENV_NAME_RE = re.compile(r"^[A-Z0-9]+(_[A-Z0-9]+)*$")


class EnvCredentialsProvider(CredentialsProvider):
    """
    Resolve credentials from environment variables.

    For the name ``orders-db`` and prefix ``APP_`` this reads
    ``APP_ORDERS_DB_USER`` and ``APP_ORDERS_DB_PASSWORD``. Extras use a
    double underscore: ``APP_ORDERS_DB__SSL_MODE`` becomes ``ssl-mode``.

    Normalized names may not start or end with ``_`` or contain ``__``, so
    no variable can belong to two names (``orders`` never sees the
    ``ORDERS_DB_*`` variables of ``orders-db``).
    """

    def __init__(self, prefix: str | None = None) -> None:
        """
        Args:
            prefix: Optional prefix to prepend to variable names.
        """
        self.prefix = prefix or ""

    def env_prefix_for(self, name: str) -> str:
        """Variable name prefix used for ``name``."""
        normalized = name.upper().replace("-", "_").replace(".", "_")
        if not _ENV_NAME_RE.match(normalized):
            raise ValueError(
                f"Credentials name {name!r} does not map to an unambiguous environment "
                "variable name"
            )
        return f"{self.prefix}{normalized}"

    def get_credentials(self, credentials_provider_name: str) -> Mapping[str, str]:
        env_prefix = self.env_prefix_for(credentials_provider_name)
        credentials: dict[str, str] = {}

        user = os.environ.get(f"{env_prefix}_USER")
        if user is not None:
            credentials[USER_PROPERTY_NAME] = user
        password = os.environ.get(f"{env_prefix}_PASSWORD")
        if password is not None:
            credentials[PASSWORD_PROPERTY_NAME] = password

        extras_prefix = f"{env_prefix}__"
        for env_key, value in os.environ.items():
            if not env_key.startswith(extras_prefix):
                continue
            suffix = env_key[len(extras_prefix):]
            if not _ENV_NAME_RE.match(suffix):
                continue
            key = suffix.lower().replace("_", "-")
            if key in RESERVED_PROPERTY_NAMES:
                continue
            credentials[key] = value

        if not credentials:
            raise CredentialsNotFoundError(
                credentials_provider_name, f"environment ({env_prefix}_*)"
            )
        return credentials
