"""Provider-neutral models returned by remote repository clients."""

from dataclasses import dataclass
from enum import Enum


class RefKind(str, Enum):
    """Kind of named reference to resolve."""

    BRANCH = "branch"
    TAG = "tag"

    @property
    def namespace(self) -> str:
        """The ref namespace under refs/ for this kind."""
        return "heads" if self is RefKind.BRANCH else "tags"


class ObjectKind(str, Enum):
    """Kind of git object a ref points at."""

    COMMIT = "commit"
    TAG = "tag"


@dataclass(frozen=True)
class ResolvedRef:
    """A ref resolved to the object it points at."""

    ref: str
    object_kind: ObjectKind
    sha: str


@dataclass(frozen=True)
class RepositoryInfo:
    """The repository metadata the reconciler needs."""

    owner: str
    repository: str
    default_branch: str | None
