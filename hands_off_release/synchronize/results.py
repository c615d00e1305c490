"""Contains results of reconciliation and sync passes."""

from dataclasses import dataclass, field

from hands_off_release.github.models import ResolvedRef
from hands_off_release.registry.models import Project
from hands_off_release.synchronize.exceptions import ReconcileError, SyncError
from hands_off_release.synchronize.models import ReconciliationDecision, SyncDecision


@dataclass(frozen=True)
class ReconcileOutcome:
    """Contains the result of reconciling one project."""

    project: Project
    decision: ReconciliationDecision
    tracked_sha: str
    previous_tag_sha: str | None
    resulting_ref: ResolvedRef | None = None
    applied: bool = False

    @property
    def changed(self) -> bool:
        """Whether the decision required a write, applied or not."""
        return self.decision.action is not SyncDecision.NOOP


@dataclass
class SyncResult:
    """Contains results of a sync pass, in registry order."""

    outcomes: list[ReconcileOutcome] = field(default_factory=list)
    errors: list[ReconcileError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise SyncError if any project failed."""
        if self.errors:
            raise SyncError(self.errors)
