"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from typer import Argument, Option
from typing_extensions import Annotated

from hands_off_release.configuration.env import Settings
from hands_off_release.configuration.exceptions import ConfigurationError, RegistryConfigurationError
from hands_off_release.registry.file import FileRegistry
from hands_off_release.synchronize.driver import HandsOffReleaseSystem
from hands_off_release.synchronize.exceptions import ReconcileError, SyncError
from hands_off_release.synchronize.results import ReconcileOutcome, SyncResult
from hands_off_release.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(
    pretty_exceptions_show_locals=False,
    help="Keep environment tags pointed at the tip of each repository's default branch.",
)

RegistryPathArgument = Annotated[Path, Argument(envvar="REGISTRY_PATH", help="Path to the YAML project registry.")]


def load_registry(registry_path: Path) -> FileRegistry:
    """Load the registry file, exiting with an error message if it is invalid."""
    try:
        return FileRegistry.from_file(registry_path)
    except RegistryConfigurationError as e:
        typer.echo(str(e), err=True)
        for error in e.errors:
            typer.echo(f"  {error}", err=True)
        raise typer.Exit(1) from e


def describe_outcome(outcome: ReconcileOutcome) -> str:
    """Render one reconciliation outcome as a single line."""
    project = outcome.project
    prefix = f"{project.full_name} [{project.environment}]"
    if not outcome.changed:
        return f"{prefix}: already at {outcome.tracked_sha}"
    verb = "created at" if outcome.previous_tag_sha is None else f"moved from {outcome.previous_tag_sha} to"
    if not outcome.applied:
        return f"{prefix}: would be {verb} {outcome.tracked_sha} (dry run)"
    return f"{prefix}: {verb} {outcome.tracked_sha}"


@typer_app.command(name="sync")
def sync_cli(
    registry_path: RegistryPathArgument,
    github_api_url: Annotated[str | None, Option(help="GitHub API URL. Defaults to GITHUB_API_URL or https://api.github.com.")] = None,
    github_pat_token: Annotated[str | None, Option(help="GitHub Personal Access Token. Defaults to GITHUB_PAT_TOKEN.")] = None,
    github_app_id: Annotated[int | None, Option(help="GitHub App ID. Defaults to GITHUB_APP_ID.")] = None,
    github_app_private_key_path: Annotated[
        Path | None, Option(help="Path to GitHub App private key. Defaults to GITHUB_APP_PRIVATE_KEY_PATH.")
    ] = None,
    github_app_installation_id: Annotated[int | None, Option(help="GitHub App Installation ID. Defaults to GITHUB_APP_INSTALLATION_ID.")] = None,
    timeout: Annotated[float | None, Option(help="Timeout in seconds for each GitHub API call. Defaults to GITHUB_TIMEOUT.")] = None,
    max_concurrency: Annotated[int, Option(envvar="MAX_CONCURRENCY", min=1, help="Number of projects reconciled at once.")] = 1,
    continue_on_error: Annotated[
        bool, Option(envvar="CONTINUE_ON_ERROR", help="Attempt every project and report all failures instead of stopping at the first.")
    ] = False,
    dry_run: Annotated[bool, Option(envvar="DRY_RUN", help="Decide what to do without changing any tag.")] = False,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Point every registered environment tag at its repository's default branch."""
    configure_logging(debug)
    registry = load_registry(registry_path)

    overrides = {
        "GITHUB_API_URL": github_api_url,
        "GITHUB_PAT_TOKEN": github_pat_token,
        "GITHUB_APP_ID": github_app_id,
        "GITHUB_APP_PRIVATE_KEY_PATH": github_app_private_key_path,
        "GITHUB_APP_INSTALLATION_ID": github_app_installation_id,
        "GITHUB_TIMEOUT": timeout,
    }
    try:
        settings = Settings(**{name: value for name, value in overrides.items() if value is not None})
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(1) from e

    async def _run() -> SyncResult:
        system = await HandsOffReleaseSystem.from_settings(registry, settings)
        return await system.sync_all(fail_fast=not continue_on_error, max_concurrency=max_concurrency, dry_run=dry_run)

    try:
        result = asyncio.run(_run())
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1) from e
    except ReconcileError as e:
        typer.echo(f"Sync failed: {e}", err=True)
        raise typer.Exit(1) from e

    for outcome in result.outcomes:
        typer.echo(describe_outcome(outcome))
    try:
        result.raise_for_errors()
    except SyncError as e:
        typer.echo("Error(s) encountered while syncing projects:", err=True)
        for error in e.errors:
            typer.echo(str(error), err=True)
        raise typer.Exit(1) from e


@typer_app.command(name="projects")
def projects_cli(registry_path: RegistryPathArgument) -> None:
    """List the projects in the registry without contacting GitHub."""
    registry = load_registry(registry_path)
    projects = registry.get_projects()
    for project in projects:
        typer.echo(f"{project.kind}\t{project.full_name}\t{project.environment}")
    typer.echo(f"{len(projects)} project(s) registered in {registry_path}")


if __name__ == "__main__":
    typer_app()
