"""
Configuration settings for credential-registry.

This module builds credentials providers from environment variables (and a
``.env`` file when present) and registers them on a registry at start-up.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

from credential_registry.credentials import (
    AWSSecretsCredentialsProvider,
    CredentialsProviderRegistry,
    EnvCredentialsProvider,
    HttpCredentialsProvider,
    VaultCredentialsProvider,
)
from credential_registry.exceptions import ConfigError

logger = logging.getLogger(__name__)

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_json_mapping(name: str) -> Dict[str, str]:
    raw = os.getenv(name)
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{name} must be valid JSON") from e
    if not isinstance(parsed, dict):
        raise ConfigError(f"{name} must be a JSON object")
    return {str(k): str(v) for k, v in parsed.items()}


@dataclass
class VaultSettings:
    """
    Configuration for the Vault credentials provider.

    Environment Variables:
        VAULT_ADDR: Vault server URL
        VAULT_TOKEN: Vault access token
        VAULT_KV_MOUNT: KV v2 mount point
        VAULT_DATABASE_MOUNT: Database secrets engine mount point
        VAULT_KV_PATHS: JSON object of name -> KV path
        VAULT_DATABASE_ROLES: JSON object of name -> database role
    """
    url: Optional[str] = None
    token: Optional[str] = None
    kv_mount: str = "secret"
    database_mount: str = "database"
    kv_paths: Dict[str, str] = field(default_factory=dict)
    database_roles: Dict[str, str] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return bool(self.url and self.token)

    @classmethod
    def from_env(cls) -> "VaultSettings":
        """Load configuration from environment variables."""
        return cls(
            url=os.getenv("VAULT_ADDR"),
            token=os.getenv("VAULT_TOKEN"),
            kv_mount=os.getenv("VAULT_KV_MOUNT", "secret"),
            database_mount=os.getenv("VAULT_DATABASE_MOUNT", "database"),
            kv_paths=_env_json_mapping("VAULT_KV_PATHS"),
            database_roles=_env_json_mapping("VAULT_DATABASE_ROLES"),
        )

    def create_provider(self) -> VaultCredentialsProvider:
        if not self.enabled:
            raise ConfigError("VAULT_ADDR and VAULT_TOKEN must be set for the Vault provider")
        return VaultCredentialsProvider(
            self.url,
            self.token,
            mount_point=self.kv_mount,
            kv_paths=self.kv_paths,
            database_mount_point=self.database_mount,
            database_roles=self.database_roles,
        )


@dataclass
class AWSSettings:
    """
    Configuration for the AWS Secrets Manager credentials provider.

    Environment Variables:
        CREDENTIALS_AWS_ENABLED: "true" to register the provider
        AWS_REGION / AWS_DEFAULT_REGION: Region
        AWS_SECRETS_PREFIX: Prefix for secret ids
    """
    enabled: bool = False
    region_name: Optional[str] = None
    prefix: str = ""

    @classmethod
    def from_env(cls) -> "AWSSettings":
        return cls(
            enabled=_env_flag("CREDENTIALS_AWS_ENABLED", "false"),
            region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
            prefix=os.getenv("AWS_SECRETS_PREFIX", ""),
        )

    def create_provider(self) -> AWSSecretsCredentialsProvider:
        return AWSSecretsCredentialsProvider(region_name=self.region_name, prefix=self.prefix)


@dataclass
class HttpSettings:
    """
    Configuration for the HTTP credentials provider.

    Environment Variables:
        CREDENTIALS_HTTP_URL: Base URL; the provider is registered when set
        CREDENTIALS_HTTP_TOKEN: Bearer token
        CREDENTIALS_HTTP_PATH: Path template with a {name} placeholder
        CREDENTIALS_HTTP_TIMEOUT: Request timeout in seconds
    """
    url: Optional[str] = None
    token: Optional[str] = None
    path_template: str = "/{name}"
    timeout: float = 5.0

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    @classmethod
    def from_env(cls) -> "HttpSettings":
        try:
            timeout = float(os.getenv("CREDENTIALS_HTTP_TIMEOUT", "5"))
        except ValueError as e:
            raise ConfigError("CREDENTIALS_HTTP_TIMEOUT must be a number") from e
        return cls(
            url=os.getenv("CREDENTIALS_HTTP_URL"),
            token=os.getenv("CREDENTIALS_HTTP_TOKEN"),
            path_template=os.getenv("CREDENTIALS_HTTP_PATH", "/{name}"),
            timeout=timeout,
        )

    def create_provider(self) -> HttpCredentialsProvider:
        if not self.enabled:
            raise ConfigError("CREDENTIALS_HTTP_URL must be set for the HTTP provider")
        return HttpCredentialsProvider(
            self.url,
            token=self.token,
            path_template=self.path_template,
            timeout=self.timeout,
        )


@dataclass
class CredentialsSettings:
    """
    Main configuration for credential-registry.

    Each enabled provider is registered under its canonical name:
    ``env``, ``vault``, ``aws`` and ``http``.

    Example:
        >>> settings = CredentialsSettings.from_env()
        >>> registry = settings.build_registry()
        >>> registry.resolve("orders-db", provider_name="env")

    Environment Variables:
        CREDENTIALS_ENV_ENABLED: Register the environment provider (default "true")
        CREDENTIALS_ENV_PREFIX: Prefix for environment credential variables
        LOG_LEVEL: Logging level, applied by configure_logging()
        See VaultSettings, AWSSettings and HttpSettings for the rest.
    """
    env_enabled: bool = True
    env_prefix: str = ""
    vault: VaultSettings = field(default_factory=VaultSettings)
    aws: AWSSettings = field(default_factory=AWSSettings)
    http: HttpSettings = field(default_factory=HttpSettings)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CredentialsSettings":
        """
        Load complete configuration from environment variables.

        This is the recommended way to configure providers in production.
        """
        return cls(
            env_enabled=_env_flag("CREDENTIALS_ENV_ENABLED", "true"),
            env_prefix=os.getenv("CREDENTIALS_ENV_PREFIX", ""),
            vault=VaultSettings.from_env(),
            aws=AWSSettings.from_env(),
            http=HttpSettings.from_env(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def configure_logging(self):
        """Configure logging based on settings."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper(), logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    def build_registry(
        self,
        registry: Optional[CredentialsProviderRegistry] = None,
    ) -> CredentialsProviderRegistry:
        """Register every enabled provider on ``registry`` (a new one by default)."""
        registry = registry if registry is not None else CredentialsProviderRegistry()

        if self.env_enabled:
            registry.register("env", EnvCredentialsProvider(prefix=self.env_prefix))
        if self.vault.enabled:
            registry.register("vault", self.vault.create_provider())
        if self.aws.enabled:
            registry.register("aws", self.aws.create_provider())
        if self.http.enabled:
            registry.register("http", self.http.create_provider())

        if not len(registry):
            logger.warning("No credentials providers enabled")
        return registry


def load_settings_from_env() -> CredentialsSettings:
    """Convenience function to load settings from environment."""
    return CredentialsSettings.from_env()
