"""Orchestrates a sync pass over every tracked project."""

import asyncio
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Self

import structlog

from hands_off_release.configuration.env import Settings
from hands_off_release.configuration.reconcile import validate_github_authentication_configuration
from hands_off_release.github.abc import RemoteRepositoryClientBase
from hands_off_release.github.adapter import GitHubKitAdapter
from hands_off_release.registry.base import Registry
from hands_off_release.registry.models import Project, ProjectKind
from hands_off_release.synchronize.exceptions import ReconcileError, UnsupportedProjectKindError
from hands_off_release.synchronize.reconciler import reconcile_project
from hands_off_release.synchronize.results import ReconcileOutcome, SyncResult
from hands_off_release.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT_SECONDS

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def dispatch_project(project: Project, client: RemoteRepositoryClientBase, dry_run: bool = False) -> ReconcileOutcome:
    """Reconcile a project with the reconciler for its kind."""
    if project.kind == ProjectKind.GITHUB.value:
        return await reconcile_project(project, client, dry_run=dry_run)
    raise UnsupportedProjectKindError(project)


async def _sync_sequentially(
    projects: Sequence[Project],
    client: RemoteRepositoryClientBase,
    fail_fast: bool,
    dry_run: bool,
) -> SyncResult:
    result = SyncResult()
    for project in projects:
        try:
            result.outcomes.append(await dispatch_project(project, client, dry_run=dry_run))
        except ReconcileError as e:
            if fail_fast:
                raise
            logger.error("Failed to reconcile project", project=project.full_name, environment=project.environment, error=str(e))
            result.errors.append(e)
    return result


async def _sync_concurrently(
    projects: Sequence[Project],
    client: RemoteRepositoryClientBase,
    fail_fast: bool,
    dry_run: bool,
    max_concurrency: int,
) -> SyncResult:
    if fail_fast:
        # Reject unsupported kinds before any project is touched.
        for project in projects:
            if project.kind != ProjectKind.GITHUB.value:
                raise UnsupportedProjectKindError(project)

    semaphore = asyncio.Semaphore(max_concurrency)

    async def _bounded(project: Project) -> ReconcileOutcome:
        async with semaphore:
            return await dispatch_project(project, client, dry_run=dry_run)

    tasks = [asyncio.create_task(_bounded(project)) for project in projects]
    if fail_fast:
        try:
            return SyncResult(outcomes=list(await asyncio.gather(*tasks)))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    result = SyncResult()
    for project, outcome in zip(projects, await asyncio.gather(*tasks, return_exceptions=True)):
        if isinstance(outcome, ReconcileError):
            logger.error("Failed to reconcile project", project=project.full_name, environment=project.environment, error=str(outcome))
            result.errors.append(outcome)
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            result.outcomes.append(outcome)
    return result


async def sync_projects(
    projects: Sequence[Project],
    client: RemoteRepositoryClientBase,
    fail_fast: bool = True,
    max_concurrency: int = 1,
    dry_run: bool = False,
) -> SyncResult:
    """Reconcile every project, in registry order.

    With ``fail_fast`` the first unsupported project or failed reconciliation
    is raised and the remaining projects are not processed. Otherwise every
    project is attempted and the errors are collected on the result.
    ``max_concurrency`` bounds how many projects are reconciled at once.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
    snapshot = tuple(projects)

    start_time = time.time()
    logger.info(
        "Syncing projects",
        project_count=len(snapshot),
        fail_fast=fail_fast,
        max_concurrency=max_concurrency,
        dry_run=dry_run,
    )
    if max_concurrency == 1:
        result = await _sync_sequentially(snapshot, client, fail_fast, dry_run)
    else:
        result = await _sync_concurrently(snapshot, client, fail_fast, dry_run, max_concurrency)
    logger.info(
        "Synced projects",
        duration=round(time.time() - start_time, 2),
        changed=sum(1 for outcome in result.outcomes if outcome.changed),
        unchanged=sum(1 for outcome in result.outcomes if not outcome.changed),
        failed=len(result.errors),
    )
    return result


class HandsOffReleaseSystem:
    """A registry paired with an authenticated remote client, ready to sync.

    Use ``create`` or ``from_settings`` to resolve credentials and build the
    GitHub client before the first sync; the constructor accepts an
    already-built client.
    """

    def __init__(self, registry: Registry, client: RemoteRepositoryClientBase) -> None:
        self.registry = registry
        self.client = client

    @classmethod
    async def create(
        cls,
        registry: Registry,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> Self:
        """Validate credentials and build the GitHub client.

        Raises:
            GitHubAuthenticationConfigurationUndefinedError: If the credentials are missing, ambiguous, or incomplete.
        """
        github_auth_type = await validate_github_authentication_configuration(
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
        )
        client = GitHubKitAdapter.create(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
            timeout=timeout,
        )
        return cls(registry, client)

    @classmethod
    async def from_settings(cls, registry: Registry, settings: Settings) -> Self:
        """Build the system from environment settings."""
        return await cls.create(
            registry,
            github_pat_token=settings.GITHUB_PAT_TOKEN,
            github_app_id=settings.GITHUB_APP_ID,
            github_app_private_key_path=settings.GITHUB_APP_PRIVATE_KEY_PATH,
            github_app_installation_id=settings.GITHUB_APP_INSTALLATION_ID,
            github_api_url=settings.GITHUB_API_URL,
            timeout=settings.GITHUB_TIMEOUT,
        )

    async def sync_all(self, fail_fast: bool = True, max_concurrency: int = 1, dry_run: bool = False) -> SyncResult:
        """Run one full sync pass over the registry."""
        return await sync_projects(
            self.registry.get_projects(),
            self.client,
            fail_fast=fail_fast,
            max_concurrency=max_concurrency,
            dry_run=dry_run,
        )
