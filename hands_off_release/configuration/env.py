"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from hands_off_release.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT_SECONDS


class Settings(BaseSettings):
    """Environment variable settings for connecting to GitHub.

    Values passed to the constructor take precedence over the environment
    and the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_TIMEOUT: float = DEFAULT_TIMEOUT_SECONDS

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: int | None = None
