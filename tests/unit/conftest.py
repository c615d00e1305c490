"""Fixtures for unit tests."""

from typing import Generator

import pytest
import structlog

from hands_off_release.github.abc import RemoteRepositoryClientBase
from hands_off_release.github.exceptions import GitHubClientError, NotFoundError
from hands_off_release.github.models import ObjectKind, RefKind, RepositoryInfo, ResolvedRef
from hands_off_release.registry.models import Project


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class FakeRemoteRepositoryClient(RemoteRepositoryClientBase):
    """In-memory remote that records calls and applies ref writes."""

    def __init__(self) -> None:
        self.default_branches: dict[tuple[str, str], str | None] = {}
        self.refs: dict[tuple[str, str, str], tuple[ObjectKind, str]] = {}
        self.tag_objects: dict[str, tuple[ObjectKind, str]] = {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def add_repository(self, owner: str, repo: str, default_branch: str | None = "main", branch_sha: str | None = None) -> None:
        self.default_branches[(owner, repo)] = default_branch
        if default_branch is not None and branch_sha is not None:
            self.refs[(owner, repo, f"refs/heads/{default_branch}")] = (ObjectKind.COMMIT, branch_sha)

    def set_tag(self, owner: str, repo: str, name: str, sha: str, object_kind: ObjectKind = ObjectKind.COMMIT) -> None:
        self.refs[(owner, repo, f"refs/tags/{name}")] = (object_kind, sha)

    def calls_to(self, name: str) -> list[tuple[object, ...]]:
        return [args for call, args in self.calls if call == name]

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]

    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        self._record("get_repository", owner, repo)
        if (owner, repo) not in self.default_branches:
            raise NotFoundError("repository not found", status_code=404)
        return RepositoryInfo(owner=owner, repository=repo, default_branch=self.default_branches[(owner, repo)])

    async def resolve_ref(self, owner: str, repo: str, ref_kind: RefKind, name: str) -> ResolvedRef:
        self._record("resolve_ref", owner, repo, ref_kind, name)
        if ref_kind is RefKind.TAG and "resolve_tag" in self.errors:
            raise self.errors["resolve_tag"]
        ref = f"refs/{ref_kind.namespace}/{name}"
        if (owner, repo, ref) not in self.refs:
            raise NotFoundError("ref not found", status_code=404)
        object_kind, sha = self.refs[(owner, repo, ref)]
        return ResolvedRef(ref=ref, object_kind=object_kind, sha=sha)

    async def get_tag_object(self, owner: str, repo: str, sha: str) -> ResolvedRef:
        self._record("get_tag_object", owner, repo, sha)
        if sha not in self.tag_objects:
            raise GitHubClientError("tag object missing", status_code=404)
        object_kind, target = self.tag_objects[sha]
        return ResolvedRef(ref="refs/tags/annotated", object_kind=object_kind, sha=target)

    async def create_ref(self, owner: str, repo: str, ref: str, sha: str, force: bool = True) -> ResolvedRef:
        self._record("create_ref", owner, repo, ref, sha, force)
        self.refs[(owner, repo, ref)] = (ObjectKind.COMMIT, sha)
        return ResolvedRef(ref=ref, object_kind=ObjectKind.COMMIT, sha=sha)

    async def update_ref(self, owner: str, repo: str, ref: str, sha: str, force: bool = True) -> ResolvedRef:
        self._record("update_ref", owner, repo, ref, sha, force)
        self.refs[(owner, repo, ref)] = (ObjectKind.COMMIT, sha)
        return ResolvedRef(ref=ref, object_kind=ObjectKind.COMMIT, sha=sha)


@pytest.fixture
def fake_client() -> FakeRemoteRepositoryClient:
    """An empty in-memory remote repository client."""
    return FakeRemoteRepositoryClient()


@pytest.fixture
def project() -> Project:
    """A GitHub project tracking the deployment environment."""
    return Project(owner="octo-org", repository="service-a", environment="deployment")
