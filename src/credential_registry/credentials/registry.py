"""
Credentials provider registry.

This module provides the ``CredentialsProviderRegistry`` class, which maps a
provider name to a ``CredentialsProvider`` and gives consumers a single
lookup operation that does not depend on where secrets are stored.

Example:
    >>> from credential_registry import CredentialsProviderRegistry
    >>> from credential_registry.credentials import StaticCredentialsProvider
    >>>
    >>> registry = CredentialsProviderRegistry()
    >>> registry.register(
    ...     "orders-db",
    ...     StaticCredentialsProvider({"orders-db": {"user": "app", "password": "s3cret"}}),
    ... )
    >>>
    >>> # Or register a function
    >>> @registry.provider("billing-db")
    ... def billing_credentials(name):
    ...     return {"user": "billing", "password": fetch_password(name)}
    >>>
    >>> credentials = registry.resolve("orders-db")
    >>> credentials["user"]
    'app'
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar, Union

from credential_registry.credentials.base import (
    CallableCredentialsProvider,
    CredentialsFunction,
    CredentialsProvider,
)
from credential_registry.exceptions import (
    DuplicateNameError,
    ProviderLookupError,
    UnknownProviderError,
)

logger = logging.getLogger(__name__)

P = TypeVar("P")

ProviderLike = Union[CredentialsProvider, CredentialsFunction]


class CredentialsProviderRegistry:
    """
    Registry mapping provider names to credentials providers.

    Providers are registered once at start-up; registering the same name
    twice raises ``DuplicateNameError`` (call ``unregister`` first to replace
    a provider). After start-up the table is only read, so ``resolve`` takes
    no lock and may be called from any number of threads.

    ``resolve`` never caches: every call goes to the provider, which is how
    rotated or dynamically generated credentials reach consumers. Provider
    failures are wrapped in ``ProviderLookupError`` and never retried.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._providers: Dict[str, CredentialsProvider] = {}
        self._write_lock = threading.Lock()

    # ── Registration ──────────────────────────────────────────────────

    def register(self, name: str, provider: ProviderLike) -> "CredentialsProviderRegistry":
        """
        Register a provider under ``name``.

        Args:
            name: Provider name consumers will resolve.
            provider: A ``CredentialsProvider`` or a plain function taking
                the name and returning a mapping.

        Returns:
            The registry, for chaining.

        Raises:
            DuplicateNameError: ``name`` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Credentials provider name must be a non-empty string")
        provider = _as_provider(provider)

        with self._write_lock:
            if name in self._providers:
                raise DuplicateNameError(name)
            # Copy-on-write keeps lock-free readers on a complete table.
            providers = dict(self._providers)
            providers[name] = provider
            self._providers = providers

        logger.info("Registered credentials provider: %s (%s)", name, type(provider).__name__)
        return self

    def unregister(self, name: str) -> CredentialsProvider:
        """Remove and return the provider registered under ``name``."""
        with self._write_lock:
            if name not in self._providers:
                raise UnknownProviderError(name, sorted(self._providers))
            providers = dict(self._providers)
            provider = providers.pop(name)
            self._providers = providers
        logger.info("Unregistered credentials provider: %s", name)
        return provider

    def provider(self, name: str) -> Callable[[P], P]:
        """
        Decorator registering a function or a provider class under ``name``.

        Classes are instantiated without arguments. The decorated object is
        returned unchanged.
        """
        def decorator(obj: P) -> P:
            if isinstance(obj, type) and issubclass(obj, CredentialsProvider):
                self.register(name, obj())
            else:
                self.register(name, obj)  # type: ignore[arg-type]
            return obj
        return decorator

    # ── Lookup ────────────────────────────────────────────────────────

    def get(self, name: str) -> Optional[CredentialsProvider]:
        """Get the provider registered under ``name``, or None."""
        return self._providers.get(name)

    def names(self) -> List[str]:
        """Get all registered provider names, sorted."""
        return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def resolve(self, name: str, *, provider_name: Optional[str] = None) -> Dict[str, str]:
        """
        Resolve the current credential set for ``name``.

        Args:
            name: Logical credentials name handed to the provider.
            provider_name: Registered provider to use when it differs from
                ``name``, e.g. one Vault provider serving several databases.

        Returns:
            A new dict owned by the caller, holding exactly what the
            provider returned.

        Raises:
            UnknownProviderError: Nothing is registered under the name.
            ProviderLookupError: The provider raised or returned something
                other than a ``str -> str`` mapping.
        """
        key = provider_name or name
        provider = self._providers.get(key)
        if provider is None:
            raise UnknownProviderError(key, self.names(), credentials_name=name)

        try:
            result = provider.get_credentials(name)
        except Exception as e:
            logger.warning("Credentials provider %s failed for %s: %s", key, name, e)
            raise ProviderLookupError(key, e, credentials_name=name) from e

        try:
            credentials = _validate_credentials(result)
        except TypeError as e:
            logger.warning("Credentials provider %s returned malformed credentials: %s", key, e)
            raise ProviderLookupError(key, e, credentials_name=name) from e

        logger.debug("Resolved credentials %s via %s: keys=%s", name, key, sorted(credentials))
        return credentials

    async def aresolve(self, name: str, *, provider_name: Optional[str] = None) -> Dict[str, str]:
        """Async variant of ``resolve``; the provider runs in a worker thread."""
        return await asyncio.to_thread(self.resolve, name, provider_name=provider_name)

    def __repr__(self) -> str:
        return f"CredentialsProviderRegistry(names={self.names()})"


def _as_provider(provider: Any) -> CredentialsProvider:
    if isinstance(provider, type):
        raise TypeError(
            f"Expected a provider instance, got the class {provider.__name__}; "
            "register an instance or use the provider() decorator"
        )
    if isinstance(provider, CredentialsProvider):
        return provider
    if callable(provider):
        return CallableCredentialsProvider(provider)
    raise TypeError(
        f"Expected a CredentialsProvider or callable, got {type(provider).__name__}"
    )


def _validate_credentials(result: Any) -> Dict[str, str]:
    if not isinstance(result, Mapping):
        raise TypeError(f"expected a mapping, got {type(result).__name__}")
    credentials = dict(result)
    for k, v in credentials.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise TypeError(f"credential property {k!r} must map a str to a str")
    return credentials


# ── Process-wide default registry ─────────────────────────────────────

_default_registry: Optional[CredentialsProviderRegistry] = None
_default_lock = threading.Lock()


def get_default_registry() -> CredentialsProviderRegistry:
    """Get the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = CredentialsProviderRegistry()
    return _default_registry


def set_default_registry(registry: Optional[CredentialsProviderRegistry]) -> None:
    """Replace the process-wide registry (None resets it)."""
    global _default_registry
    with _default_lock:
        _default_registry = registry


def register_provider(name: str, provider: ProviderLike) -> CredentialsProviderRegistry:
    """Register a provider on the default registry."""
    return get_default_registry().register(name, provider)


def get_credentials(name: str, *, provider_name: Optional[str] = None) -> Dict[str, str]:
    """Resolve credentials through the default registry."""
    return get_default_registry().resolve(name, provider_name=provider_name)
