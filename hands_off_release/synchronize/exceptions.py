"""Contains exceptions raised while reconciling projects."""

from collections.abc import Sequence

from hands_off_release.registry.models import Project
from hands_off_release.synchronize.models import ReconcileStep


class ReconcileError(Exception):
    """Raised when a project cannot be reconciled."""

    def __init__(self, project: Project, message: str) -> None:
        """Initializes the exception with the project it concerns."""
        super().__init__(f"{project.full_name} ({project.environment}): {message}")
        self.project = project


class NoDefaultBranchError(ReconcileError):
    """Raised when a repository reports no default branch."""

    def __init__(self, project: Project) -> None:
        super().__init__(project, "project does not have a default branch defined")


class RemoteError(ReconcileError):
    """Raised when a remote call fails; ``step`` names the call."""

    def __init__(self, project: Project, step: ReconcileStep, message: str) -> None:
        super().__init__(project, f"{step.value} failed: {message}")
        self.step = step


class UnsupportedProjectKindError(ReconcileError):
    """Raised when a project is hosted on a provider that is not supported."""

    def __init__(self, project: Project) -> None:
        super().__init__(project, f"project kind currently not supported: {project.kind!r}")


class SyncError(Exception):
    """Raised when one or more projects failed during a sync pass."""

    def __init__(self, errors: Sequence[ReconcileError]) -> None:
        """Initializes the exception with every error the pass collected."""
        super().__init__(f"{len(errors)} project(s) failed to sync: " + "; ".join(str(error) for error in errors))
        self.errors = list(errors)
