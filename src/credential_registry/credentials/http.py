"""
Credentials provider for a plain HTTP secrets endpoint.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests

from credential_registry.credentials.base import CredentialsProvider, normalize_username
from credential_registry.exceptions import CredentialsNotFoundError

logger = logging.getLogger(__name__)


class HttpCredentialsProvider(CredentialsProvider):
    """
    Fetch credential sets from an HTTP endpoint returning JSON objects.

    ``GET {base_url}{path_template.format(name=name)}`` must answer with a
    JSON object such as ``{"user": "app", "password": "..."}``. A 404 means
    the store has no entry for the name; other error statuses are raised by
    ``requests``. There are no retries: the registry surfaces the failure.

    Example:
        >>> provider = HttpCredentialsProvider(
        ...     "https://secrets.internal",
        ...     token="...",
        ...     path_template="/v1/credentials/{name}",
        ... )
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        path_template: str = "/{name}",
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.path_template = path_template
        self.timeout = timeout
        self._session = session or requests.Session()

    def url_for(self, name: str) -> str:
        return f"{self.base_url}{self.path_template.format(name=name)}"

    def get_credentials(self, credentials_provider_name: str) -> Mapping[str, str]:
        url = self.url_for(credentials_provider_name)
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self._session.get(url, headers=headers, timeout=self.timeout)
        if response.status_code == 404:
            raise CredentialsNotFoundError(credentials_provider_name, url)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object from {url}")
        logger.debug("Fetched credentials for %s from %s", credentials_provider_name, url)
        return normalize_username(payload)
