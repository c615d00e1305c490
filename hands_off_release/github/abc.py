"""Base ABC for remote repository clients."""

from abc import ABC, abstractmethod

from .models import RefKind, RepositoryInfo, ResolvedRef


class RemoteRepositoryClientBase(ABC):
    """Base ABC for remote repository clients.

    Implementations raise NotFoundError when the requested object does not exist and
    GitHubClientError for every other failure.
    """

    # Repository
    @abstractmethod
    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """Get repository metadata."""
        pass

    # Refs
    @abstractmethod
    async def resolve_ref(self, owner: str, repo: str, ref_kind: RefKind, name: str) -> ResolvedRef:
        """Resolve a branch or tag to the object it points at."""
        pass

    @abstractmethod
    async def get_tag_object(self, owner: str, repo: str, sha: str) -> ResolvedRef:
        """Resolve an annotated tag object to the object it points at."""
        pass

    @abstractmethod
    async def create_ref(self, owner: str, repo: str, ref: str, sha: str, force: bool = True) -> ResolvedRef:
        """Create a fully qualified ref (e.g. refs/tags/deployment) pointing at a SHA."""
        pass

    @abstractmethod
    async def update_ref(self, owner: str, repo: str, ref: str, sha: str, force: bool = True) -> ResolvedRef:
        """Move a fully qualified ref to a SHA."""
        pass
