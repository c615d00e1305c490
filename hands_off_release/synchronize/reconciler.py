"""Contains reconciliation logic for a single project's environment tag."""

import structlog

from hands_off_release.github.abc import RemoteRepositoryClientBase
from hands_off_release.github.exceptions import GitHubClientError, NotFoundError
from hands_off_release.github.models import ObjectKind, RefKind, ResolvedRef
from hands_off_release.registry.models import Project
from hands_off_release.synchronize.exceptions import NoDefaultBranchError, RemoteError
from hands_off_release.synchronize.models import ReconcileStep, ReconciliationDecision, SyncDecision
from hands_off_release.synchronize.results import ReconcileOutcome
from hands_off_release.utils.github import full_tag_ref

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def decide_tag_sync_action(tracked_sha: str, tag_sha: str | None) -> ReconciliationDecision:
    """Compare the default branch head with the environment tag, and decide whether to create, update, or no-op."""
    if tag_sha is None:
        return ReconciliationDecision.create(tracked_sha)
    if tag_sha == tracked_sha:
        return ReconciliationDecision.noop()
    return ReconciliationDecision.update(tracked_sha)


async def _resolve_tag_sha(project: Project, client: RemoteRepositoryClientBase) -> str | None:
    """Return the commit the environment tag targets, or None when the tag does not exist.

    An annotated tag is peeled exactly once.
    """
    try:
        tag = await client.resolve_ref(project.owner, project.repository, RefKind.TAG, project.environment)
    except NotFoundError:
        return None
    except GitHubClientError as e:
        raise RemoteError(project, ReconcileStep.TAG, str(e)) from e

    if tag.object_kind is ObjectKind.COMMIT:
        return tag.sha
    try:
        target = await client.get_tag_object(project.owner, project.repository, tag.sha)
    except GitHubClientError as e:
        raise RemoteError(project, ReconcileStep.TAG, f"unable to read annotated tag {tag.sha}: {e}") from e
    return target.sha


async def reconcile_project(project: Project, client: RemoteRepositoryClientBase, dry_run: bool = False) -> ReconcileOutcome:
    """Point the project's environment tag at the head of its default branch.

    Issues at most one write. Raises NoDefaultBranchError when the repository
    has no default branch and RemoteError when any remote call fails; a tag
    that does not exist yet is created rather than treated as an error.
    """
    log = logger.bind(owner=project.owner, repository=project.repository, environment=project.environment)

    try:
        repository = await client.get_repository(project.owner, project.repository)
    except GitHubClientError as e:
        raise RemoteError(project, ReconcileStep.REPOSITORY, str(e)) from e
    if not repository.default_branch:
        log.error("Project does not have a default branch defined")
        raise NoDefaultBranchError(project)

    try:
        branch = await client.resolve_ref(project.owner, project.repository, RefKind.BRANCH, repository.default_branch)
    except GitHubClientError as e:
        raise RemoteError(project, ReconcileStep.BRANCH, f"{repository.default_branch}: {e}") from e
    tracked_sha = branch.sha

    tag_sha = await _resolve_tag_sha(project, client)
    decision = decide_tag_sync_action(tracked_sha, tag_sha)
    log = log.bind(default_branch=repository.default_branch, tracked_sha=tracked_sha, tag_sha=tag_sha, decision=decision.action.value)

    if decision.action is SyncDecision.NOOP:
        log.info("Deployment already in appropriate spot")
        return ReconcileOutcome(project, decision, tracked_sha, tag_sha)

    if dry_run:
        log.info("Dry run mode, environment tag has not been changed")
        return ReconcileOutcome(project, decision, tracked_sha, tag_sha)

    ref = full_tag_ref(project.environment)
    resulting_ref: ResolvedRef
    if decision.action is SyncDecision.CREATE:
        try:
            resulting_ref = await client.create_ref(project.owner, project.repository, ref, tracked_sha, force=True)
        except GitHubClientError as e:
            raise RemoteError(project, ReconcileStep.CREATE, f"Unable to create new ref {ref}: {e}") from e
        log.info("Created environment tag", ref=ref)
    else:
        try:
            resulting_ref = await client.update_ref(project.owner, project.repository, ref, tracked_sha, force=True)
        except GitHubClientError as e:
            raise RemoteError(project, ReconcileStep.UPDATE, f"Unable to update existing ref {ref}: {e}") from e
        log.info("Moved environment tag", ref=ref)

    return ReconcileOutcome(project, decision, tracked_sha, tag_sha, resulting_ref=resulting_ref, applied=True)
