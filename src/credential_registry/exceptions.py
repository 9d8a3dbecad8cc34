"""
Custom exception hierarchy for credential-registry.
"""


class CredentialsError(Exception):
    """Base exception for all credential-registry errors."""
    pass


# === Registry Errors ===

class DuplicateNameError(CredentialsError):
    """A credentials provider is already registered under this name."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Credentials provider '{name}' is already registered")


class UnknownProviderError(CredentialsError):
    """No credentials provider registered under the requested name."""
    def __init__(
        self,
        name: str,
        available: list[str] | None = None,
        credentials_name: str | None = None,
    ):
        self.name = name
        self.available = available or []
        self.credentials_name = credentials_name or name
        super().__init__(
            f"Credentials provider '{name}' not found"
            + _for_credentials(name, self.credentials_name)
            + f". Available: {self.available}"
        )


class ProviderLookupError(CredentialsError):
    """The credentials provider failed while producing a credential set."""
    def __init__(self, name: str, cause: Exception, credentials_name: str | None = None):
        self.name = name
        self.cause = cause
        self.credentials_name = credentials_name or name
        super().__init__(
            f"Credentials provider '{name}' failed"
            + _for_credentials(name, self.credentials_name)
            + f": {cause}"
        )


def _for_credentials(name: str, credentials_name: str) -> str:
    return f" for '{credentials_name}'" if credentials_name != name else ""


# === Provider Errors ===

class CredentialsNotFoundError(CredentialsError):
    """The backing store holds no credentials for the requested name."""
    def __init__(self, name: str, store: str = ""):
        self.name = name
        self.store = store
        super().__init__(
            f"No credentials found for '{name}'" + (f" in {store}" if store else "")
        )


# === Config Errors ===

class ConfigError(CredentialsError):
    """Configuration error."""
    pass
