"""
AWS Secrets Manager-backed credentials provider.

Uses ``boto3`` lazily when the first client is built. If ``boto3`` is not
installed, an informative ImportError is raised at that point.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Mapping

from credential_registry.credentials.base import CredentialsProvider, normalize_username
from credential_registry.exceptions import CredentialsNotFoundError

logger = logging.getLogger(__name__)


class AWSSecretsCredentialsProvider(CredentialsProvider):
    """
    Resolve credentials stored as JSON secrets in AWS Secrets Manager.

    The secret id is ``secret_ids.get(name)`` or ``prefix + name``. The
    secret must be a JSON object, which is the layout RDS-managed secrets
    use (``{"username": ..., "password": ..., "host": ...}``); ``username``
    is exposed as ``user`` and every other field is returned as an extra.
    """

    def __init__(
        self,
        *,
        region_name: str | None = None,
        prefix: str = "",
        secret_ids: Mapping[str, str] | None = None,
        client: Any = None,
    ) -> None:
        """
        Args:
            region_name: AWS region (falls back to standard AWS env/config
                resolution when omitted).
            prefix: Prefix prepended to names to form secret ids.
            secret_ids: Explicit name to secret id mapping.
            client: Pre-built ``secretsmanager`` client.
        """
        self.region_name = region_name
        self.prefix = prefix
        self.secret_ids = dict(secret_ids or {})
        self._client = client
        self._client_lock = threading.Lock()

    def _get_client(self):
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    try:
                        import boto3  # type: ignore[import]
                    except ImportError as e:  # pragma: no cover - optional dependency
                        raise ImportError(
                            "AWSSecretsCredentialsProvider requires the 'boto3' package. "
                            "Install with: pip install credential-registry[aws]"
                        ) from e
                    self._client = boto3.client("secretsmanager", region_name=self.region_name)
        return self._client

    def secret_id_for(self, name: str) -> str:
        if name in self.secret_ids:
            return self.secret_ids[name]
        return f"{self.prefix}{name}"

    def get_credentials(self, credentials_provider_name: str) -> Mapping[str, str]:
        client = self._get_client()
        secret_id = self.secret_id_for(credentials_provider_name)
        try:
            resp = client.get_secret_value(SecretId=secret_id)
        except client.exceptions.ResourceNotFoundException as e:
            raise CredentialsNotFoundError(
                credentials_provider_name, f"AWS secret {secret_id}"
            ) from e

        secret = resp.get("SecretString")
        if secret is None and resp.get("SecretBinary") is not None:
            secret = resp["SecretBinary"].decode("utf-8")
        if not secret:
            raise CredentialsNotFoundError(credentials_provider_name, f"AWS secret {secret_id}")

        try:
            data = json.loads(secret)
        except json.JSONDecodeError as e:
            raise ValueError(f"AWS secret {secret_id} is not a JSON object") from e
        if not isinstance(data, dict):
            raise ValueError(f"AWS secret {secret_id} is not a JSON object")

        logger.debug("Read AWS secret %s (version %s)", secret_id, resp.get("VersionId"))
        return normalize_username(data)
