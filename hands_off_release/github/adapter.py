"""GitHub client adapter for the githubkit library."""

from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException, RequestFailed
from githubkit.versions.latest.models import FullRepository, GitRef, GitTag
from pydantic import ValidationError

from hands_off_release.configuration.models import GitHubAuthenticationType
from hands_off_release.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT_SECONDS, NOT_FOUND_MESSAGE, TAG_REF_PREFIX
from hands_off_release.utils.github import strip_refs_prefix

from .abc import RemoteRepositoryClientBase
from .client import GitHubClient, get_github_client
from .exceptions import GitHubClientError, NotFoundError
from .models import ObjectKind, RefKind, RepositoryInfo, ResolvedRef

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _error_message(exc: RequestFailed) -> str:
    """Extract the message field of a GitHub error payload, if there is one."""
    try:
        error_data = exc.response.json()
    except Exception:
        return ""
    if isinstance(error_data, dict):
        return str(error_data.get("message", ""))
    return ""


def translate_github_errors(func: F) -> F:
    """Decorator translating githubkit exceptions into GitHubClientError and NotFoundError.

    GitHub signals a missing object with an error payload whose message is
    literally "Not Found"; only that message becomes NotFoundError.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            status_code = exc.response.status_code
            message = _error_message(exc)
            if message == NOT_FOUND_MESSAGE:
                raise NotFoundError(f"GitHub returned Not Found in {func.__name__}", status_code=status_code) from exc
            if status_code == 422:
                try:
                    errors = exc.response.json().get("errors", [])
                except Exception:
                    errors = []
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=getattr(exc.response, "url", None),
                    status_code=422,
                )
            raise GitHubClientError(
                f"GitHub {status_code} error in {func.__name__}: {message or exc}",
                status_code=status_code,
            ) from exc
        except ValidationError as exc:
            raise GitHubClientError(f"Unexpected GitHub response payload in {func.__name__}: {exc}") from exc
        except GitHubException as exc:
            raise GitHubClientError(f"GitHub request failed in {func.__name__}: {exc!r}") from exc

    return wrapper  # type: ignore


def _object_kind(object_type: str) -> ObjectKind:
    """Map a git object type string onto ObjectKind, rejecting trees and blobs."""
    try:
        return ObjectKind(object_type)
    except ValueError:
        raise GitHubClientError(f"Unexpected ref object type: {object_type}") from None


class GitHubKitAdapter(RemoteRepositoryClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client

    @classmethod
    def create(
        cls,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)
            timeout: Upper bound in seconds for every API call

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            GitHubAuthenticationConfigurationUndefinedError: If required parameters for the chosen auth type are missing
        """
        logger.info(
            "Creating client for GitHub instance",
            github_api_url=github_api_url,
            github_auth_type=github_auth_type.value,
            timeout=timeout,
        )
        client = get_github_client(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
            timeout=timeout,
        )
        return cls(client)

    # Repository
    @translate_github_errors
    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """Get the repository metadata."""
        response: Response[FullRepository] = await self.client.rest.repos.async_get(owner=owner, repo=repo)
        repository = response.parsed_data
        return RepositoryInfo(owner=owner, repository=repo, default_branch=repository.default_branch or None)

    # Refs
    @translate_github_errors
    async def resolve_ref(self, owner: str, repo: str, ref_kind: RefKind, name: str) -> ResolvedRef:
        """Resolve a branch or tag to the object it points at."""
        response: Response[GitRef] = await self.client.rest.git.async_get_ref(owner=owner, repo=repo, ref=f"{ref_kind.namespace}/{name}")
        git_ref = response.parsed_data
        logger.debug("Resolved ref", owner=owner, repo=repo, ref=git_ref.ref, object_type=git_ref.object_.type, sha=git_ref.object_.sha)
        return ResolvedRef(ref=git_ref.ref, object_kind=_object_kind(git_ref.object_.type), sha=git_ref.object_.sha)

    @translate_github_errors
    async def get_tag_object(self, owner: str, repo: str, sha: str) -> ResolvedRef:
        """Resolve an annotated tag object to the object it points at."""
        response: Response[GitTag] = await self.client.rest.git.async_get_tag(owner=owner, repo=repo, tag_sha=sha)
        git_tag = response.parsed_data
        return ResolvedRef(
            ref=f"{TAG_REF_PREFIX}{git_tag.tag}",
            object_kind=_object_kind(git_tag.object_.type),
            sha=git_tag.object_.sha,
        )

    @translate_github_errors
    async def create_ref(self, owner: str, repo: str, ref: str, sha: str, force: bool = True) -> ResolvedRef:
        """Create a ref.

        The typed create endpoint has no ``force`` field, so the request is
        sent as raw JSON to carry it.
        """
        response: Response[GitRef] = await self.client.arequest(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            json={"ref": ref, "sha": sha, "force": force},
            response_model=GitRef,
        )
        git_ref = response.parsed_data
        logger.info("Created ref", owner=owner, repo=repo, ref=git_ref.ref, sha=git_ref.object_.sha)
        return ResolvedRef(ref=git_ref.ref, object_kind=_object_kind(git_ref.object_.type), sha=git_ref.object_.sha)

    @translate_github_errors
    async def update_ref(self, owner: str, repo: str, ref: str, sha: str, force: bool = True) -> ResolvedRef:
        """Move an existing ref to a SHA."""
        response: Response[GitRef] = await self.client.rest.git.async_update_ref(
            owner=owner,
            repo=repo,
            ref=strip_refs_prefix(ref),
            sha=sha,
            force=force,
        )
        git_ref = response.parsed_data
        logger.info("Updated ref", owner=owner, repo=repo, ref=git_ref.ref, sha=git_ref.object_.sha)
        return ResolvedRef(ref=git_ref.ref, object_kind=_object_kind(git_ref.object_.type), sha=git_ref.object_.sha)
