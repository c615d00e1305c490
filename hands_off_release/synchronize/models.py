"""Models describing reconciliation decisions."""

from dataclasses import dataclass
from enum import Enum


class SyncDecision(str, Enum):
    """Action needed to converge an environment tag on its default branch."""

    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"


class ReconcileStep(str, Enum):
    """Step of a reconciliation that talks to the remote service."""

    REPOSITORY = "repository fetch"
    BRANCH = "branch resolution"
    TAG = "tag resolution"
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class ReconciliationDecision:
    """A decision and, for CREATE and UPDATE, the SHA the tag must point at."""

    action: SyncDecision
    sha: str | None = None

    @classmethod
    def noop(cls) -> "ReconciliationDecision":
        return cls(SyncDecision.NOOP)

    @classmethod
    def create(cls, sha: str) -> "ReconciliationDecision":
        return cls(SyncDecision.CREATE, sha)

    @classmethod
    def update(cls, sha: str) -> "ReconciliationDecision":
        return cls(SyncDecision.UPDATE, sha)
