"""Unit tests for the GitHubKitAdapter class and related GitHub operations."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import GitHubException, RequestFailed

from hands_off_release.github.adapter import GitHubKitAdapter
from hands_off_release.github.exceptions import GitHubClientError, NotFoundError
from hands_off_release.github.models import ObjectKind, RefKind, ResolvedRef


class DummyResponse:
    """A dummy response object to mock GitHub API responses."""

    def __init__(self, ref: str = "refs/heads/main", object_type: str = "commit", sha: str = "abc123", default_branch: str | None = "main") -> None:
        """Initialize the dummy response with a ref, object type, and SHA."""
        self.status_code: int = 200
        self.parsed_data = MagicMock()
        self.parsed_data.ref = ref
        self.parsed_data.tag = ref.removeprefix("refs/tags/")
        self.parsed_data.object_.type = object_type
        self.parsed_data.object_.sha = sha
        self.parsed_data.default_branch = default_branch


def make_request_failed(status_code: int, message: str) -> RequestFailed:
    """Build a githubkit RequestFailed carrying a GitHub error payload."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"message": message, "documentation_url": "https://docs.github.com/rest"}
    return RequestFailed(response)


@pytest.fixture
def adapter() -> GitHubKitAdapter:
    """An adapter around a mocked githubkit client."""
    return GitHubKitAdapter(MagicMock())


@pytest.mark.asyncio
async def test_get_repository_returns_default_branch(adapter: GitHubKitAdapter) -> None:
    """Test that get_repository exposes the default branch."""
    adapter.client.rest.repos.async_get = AsyncMock(return_value=DummyResponse(default_branch="release"))
    repository = await adapter.get_repository("owner", "repo")
    assert repository.default_branch == "release"
    adapter.client.rest.repos.async_get.assert_awaited_once_with(owner="owner", repo="repo")


@pytest.mark.asyncio
async def test_get_repository_without_default_branch(adapter: GitHubKitAdapter) -> None:
    """Test that an empty default branch is reported as missing."""
    adapter.client.rest.repos.async_get = AsyncMock(return_value=DummyResponse(default_branch=""))
    repository = await adapter.get_repository("owner", "repo")
    assert repository.default_branch is None


@pytest.mark.asyncio
async def test_resolve_branch(adapter: GitHubKitAdapter) -> None:
    """Test that a branch is resolved through the heads namespace."""
    adapter.client.rest.git.async_get_ref = AsyncMock(return_value=DummyResponse(sha="abc123"))
    resolved = await adapter.resolve_ref("owner", "repo", RefKind.BRANCH, "main")
    assert resolved == ResolvedRef(ref="refs/heads/main", object_kind=ObjectKind.COMMIT, sha="abc123")
    adapter.client.rest.git.async_get_ref.assert_awaited_once_with(owner="owner", repo="repo", ref="heads/main")


@pytest.mark.asyncio
async def test_resolve_annotated_tag(adapter: GitHubKitAdapter) -> None:
    """Test that an annotated tag reports the tag object kind."""
    adapter.client.rest.git.async_get_ref = AsyncMock(return_value=DummyResponse(ref="refs/tags/deployment", object_type="tag", sha="tagobj"))
    resolved = await adapter.resolve_ref("owner", "repo", RefKind.TAG, "deployment")
    assert resolved.object_kind is ObjectKind.TAG
    adapter.client.rest.git.async_get_ref.assert_awaited_once_with(owner="owner", repo="repo", ref="tags/deployment")


@pytest.mark.asyncio
async def test_resolve_ref_not_found(adapter: GitHubKitAdapter) -> None:
    """Test that a Not Found payload becomes NotFoundError."""
    adapter.client.rest.git.async_get_ref = AsyncMock(side_effect=make_request_failed(404, "Not Found"))
    with pytest.raises(NotFoundError):
        await adapter.resolve_ref("owner", "repo", RefKind.TAG, "deployment")


@pytest.mark.asyncio
async def test_resolve_ref_other_error(adapter: GitHubKitAdapter) -> None:
    """Test that other error payloads are not reported as Not Found."""
    adapter.client.rest.git.async_get_ref = AsyncMock(side_effect=make_request_failed(401, "Bad credentials"))
    with pytest.raises(GitHubClientError) as exc_info:
        await adapter.resolve_ref("owner", "repo", RefKind.TAG, "deployment")
    assert not isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.status_code == 401
    assert "Bad credentials" in str(exc_info.value)


@pytest.mark.asyncio
async def test_resolve_ref_transport_error(adapter: GitHubKitAdapter) -> None:
    """Test that transport failures become GitHubClientError."""
    adapter.client.rest.git.async_get_ref = AsyncMock(side_effect=GitHubException("connection reset"))
    with pytest.raises(GitHubClientError) as exc_info:
        await adapter.resolve_ref("owner", "repo", RefKind.BRANCH, "main")
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_resolve_ref_unexpected_object_type(adapter: GitHubKitAdapter) -> None:
    """Test that a ref pointing at a tree is rejected."""
    adapter.client.rest.git.async_get_ref = AsyncMock(return_value=DummyResponse(object_type="tree"))
    with pytest.raises(GitHubClientError, match="Unexpected ref object type"):
        await adapter.resolve_ref("owner", "repo", RefKind.BRANCH, "main")


@pytest.mark.asyncio
async def test_get_tag_object(adapter: GitHubKitAdapter) -> None:
    """Test that an annotated tag object is resolved to its target."""
    adapter.client.rest.git.async_get_tag = AsyncMock(return_value=DummyResponse(ref="refs/tags/deployment", sha="abc123"))
    target = await adapter.get_tag_object("owner", "repo", "tagobj")
    assert target == ResolvedRef(ref="refs/tags/deployment", object_kind=ObjectKind.COMMIT, sha="abc123")
    adapter.client.rest.git.async_get_tag.assert_awaited_once_with(owner="owner", repo="repo", tag_sha="tagobj")


@pytest.mark.asyncio
async def test_create_ref_sends_force(adapter: GitHubKitAdapter) -> None:
    """Test that create_ref posts the full ref with the force flag."""
    adapter.client.arequest = AsyncMock(return_value=DummyResponse(ref="refs/tags/deployment", sha="abc123"))
    created = await adapter.create_ref("owner", "repo", "refs/tags/deployment", "abc123", force=True)
    assert created.sha == "abc123"
    args, kwargs = adapter.client.arequest.call_args
    assert args == ("POST", "/repos/owner/repo/git/refs")
    assert kwargs["json"] == {"ref": "refs/tags/deployment", "sha": "abc123", "force": True}


@pytest.mark.asyncio
async def test_update_ref_strips_refs_prefix(adapter: GitHubKitAdapter) -> None:
    """Test that update_ref addresses the ref relative to refs/ and forces the move."""
    adapter.client.rest.git.async_update_ref = AsyncMock(return_value=DummyResponse(ref="refs/tags/deployment", sha="abc123"))
    await adapter.update_ref("owner", "repo", "refs/tags/deployment", "abc123", force=True)
    adapter.client.rest.git.async_update_ref.assert_awaited_once_with(owner="owner", repo="repo", ref="tags/deployment", sha="abc123", force=True)


@pytest.mark.asyncio
async def test_create_ref_unprocessable(adapter: GitHubKitAdapter) -> None:
    """Test that a 422 on create is raised as GitHubClientError."""
    adapter.client.arequest = AsyncMock(side_effect=make_request_failed(422, "Reference already exists"))
    with pytest.raises(GitHubClientError) as exc_info:
        await adapter.create_ref("owner", "repo", "refs/tags/deployment", "abc123")
    assert exc_info.value.status_code == 422
