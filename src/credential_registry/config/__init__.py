"""
Configuration module for credential-registry.

Provides environment-driven settings for:
- the environment, Vault, AWS Secrets Manager and HTTP providers
- building a registry with every enabled provider
"""

from credential_registry.config.settings import (
    AWSSettings,
    CredentialsSettings,
    HttpSettings,
    VaultSettings,
    load_settings_from_env,
)

__all__ = [
    "CredentialsSettings",
    "VaultSettings",
    "AWSSettings",
    "HttpSettings",
    "load_settings_from_env",
]
