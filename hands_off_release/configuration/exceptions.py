"""Contains exceptions raised when reconciling application configuration."""

from typing import Any


class ConfigurationError(Exception):
    """Base class for configuration problems detected at startup."""

    pass


class GitHubAuthenticationConfigurationUndefinedError(ConfigurationError):
    """Raised when the GitHub authentication configuration is undefined."""

    pass


class RegistryConfigurationError(ConfigurationError):
    """Raised when the project registry cannot be loaded."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        """Initializes the exception with every error collected while loading."""
        super().__init__(message)
        self.errors = errors or []
