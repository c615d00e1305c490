# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from pathlib import Path
from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import (
    AppAuthStrategy,
    AppInstallationAuthStrategy,
    TokenAuthStrategy,
)

from hands_off_release.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError
from hands_off_release.configuration.models import GitHubAuthenticationType

GitHubClient: TypeAlias = GitHub[AppInstallationAuthStrategy] | GitHub[TokenAuthStrategy]


def get_github_app_client(
    github_app_id: int,
    github_app_private_key_path: Path,
    github_app_installation_id: int,
    github_api_url: str,
    timeout: float,
) -> GitHub[AppInstallationAuthStrategy]:
    """Returns a GitHub client authenticated as a GitHub App installation."""
    try:
        private_key = Path(github_app_private_key_path).read_text(encoding="utf-8")
    except OSError as e:
        raise GitHubAuthenticationConfigurationUndefinedError(
            f"Unable to read GitHub App private key from {github_app_private_key_path}: {e}"
        ) from e
    auth = AppAuthStrategy(app_id=github_app_id, private_key=private_key)
    # No HTTP caching and no automatic retries
    app_client = GitHub(auth=auth, base_url=github_api_url, http_cache=False, auto_retry=False, timeout=timeout)
    return app_client.with_auth(app_client.auth.as_installation(github_app_installation_id))


def get_github_pat_client(github_pat_token: str, github_api_url: str, timeout: float) -> GitHub[TokenAuthStrategy]:
    """Returns a GitHub client authenticated with a personal access token."""
    # No HTTP caching and no automatic retries
    return GitHub(
        auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False, auto_retry=False, timeout=timeout
    )


def get_github_client(
    github_auth_type: GitHubAuthenticationType,
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
    github_api_url: str,
    timeout: float,
) -> GitHubClient:
    """Returns an authenticated GitHub client using either GitHub App or PAT credentials.

    Supports custom base URL for GitHub Enterprise Server (GHES). Every request
    made through the returned client is bounded by ``timeout`` seconds.
    """
    if github_auth_type == GitHubAuthenticationType.APP:
        if not (github_app_id and github_app_private_key_path and github_app_installation_id):
            raise GitHubAuthenticationConfigurationUndefinedError(
                "GitHub App authentication requires app_id, private_key_path, and installation_id in config."
            )
        return get_github_app_client(github_app_id, github_app_private_key_path, github_app_installation_id, github_api_url, timeout)
    if not github_pat_token:
        raise GitHubAuthenticationConfigurationUndefinedError("GitHub PAT authentication requires github_pat_token in config.")
    return get_github_pat_client(github_pat_token, github_api_url, timeout)
