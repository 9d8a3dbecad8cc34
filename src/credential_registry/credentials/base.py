"""
Credentials provider interface and reserved property names.

A provider turns a logical credentials provider name (e.g. ``"orders-db"``)
into a credential set: a flat ``str -> str`` mapping. ``user`` and
``password`` have a fixed meaning for every provider and consumer; any other
key is an extra that consumers may ignore or forward verbatim to the client
they configure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Mapping

USER_PROPERTY_NAME = "user"
PASSWORD_PROPERTY_NAME = "password"
EXPIRATION_TIMESTAMP_PROPERTY_NAME = "expiration-timestamp"

RESERVED_PROPERTY_NAMES = frozenset({USER_PROPERTY_NAME, PASSWORD_PROPERTY_NAME})

CredentialsFunction = Callable[[str], Mapping[str, str]]


class CredentialsProvider(ABC):
    """
    Abstract base class for credential sources.

    Implementations look credentials up in a static store, environment
    variables, a vault, a cloud secret manager, etc. Each call must go to
    the backing store again so rotated credentials are picked up.

    Example:
        class MyProvider(CredentialsProvider):
            def get_credentials(self, credentials_provider_name):
                secret = self.client.read(credentials_provider_name)
                return {"user": secret.login, "password": secret.password}
    """

    @abstractmethod
    def get_credentials(self, credentials_provider_name: str) -> Mapping[str, str]:
        """
        Return the current credential set for a name.

        Args:
            credentials_provider_name: Logical name chosen by the operator.

        Returns:
            Mapping of property name to value. Should contain ``user`` and
            ``password`` where the backing store has them.
        """
        raise NotImplementedError


class CallableCredentialsProvider(CredentialsProvider):
    """Adapt a plain ``name -> mapping`` function to ``CredentialsProvider``."""

    def __init__(self, func: CredentialsFunction) -> None:
        self.func = func

    def get_credentials(self, credentials_provider_name: str) -> Mapping[str, str]:
        return self.func(credentials_provider_name)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"CallableCredentialsProvider({name})"


def normalize_username(data: Mapping[str, object]) -> dict[str, str]:
    """
    Stringify a raw secret payload and map ``username`` onto ``user``.

    Secret stores commonly use ``username``; consumers only understand the
    reserved ``user`` key. ``None`` values are dropped.
    """
    out = {str(k): str(v) for k, v in data.items() if v is not None}
    if USER_PROPERTY_NAME not in out and "username" in out:
        out[USER_PROPERTY_NAME] = out.pop("username")
    return out
