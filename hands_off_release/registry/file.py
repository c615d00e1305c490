"""Registry loaded from a YAML file.

The file is expected to have a top-level 'projects' key containing a list of
project mappings. Every problem found while loading is collected and raised
together in a single RegistryConfigurationError.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from structlog.stdlib import BoundLogger

from hands_off_release.configuration.exceptions import RegistryConfigurationError

from .base import Registry
from .models import Project

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore

yaml = YAML(typ="safe")


class FileRegistry(Registry):
    """Registry backed by a YAML file read once at construction time."""

    def __init__(self, path: Path, projects: Sequence[Project]) -> None:
        self.path = path
        self._projects = tuple(projects)

    @classmethod
    def from_file(cls, path: Path | str) -> "FileRegistry":
        """Load and validate the projects listed in a YAML registry file.

        Raises:
            RegistryConfigurationError: If the file is missing, malformed, or lists invalid projects.
        """
        path = Path(path)
        data = cls._load_yaml_file(path)
        if not isinstance(data, dict) or "projects" not in data:
            logger.error("No 'projects' key found in registry file", file=str(path))
            raise RegistryConfigurationError(
                f"Registry file {path} has no top-level 'projects' key",
                errors=[{"file": str(path), "error": "No 'projects' key found"}],
            )
        entries = data["projects"]
        if not isinstance(entries, list):
            raise RegistryConfigurationError(
                f"Registry file {path} must list projects as a sequence",
                errors=[{"file": str(path), "error": f"'projects' is a {type(entries).__name__}, not a list"}],
            )

        projects: list[Project] = []
        errors: list[dict[str, Any]] = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                logger.warning(
                    "Project entry is not a mapping",
                    file=str(path),
                    project_index=idx,
                    actual_type=type(entry).__name__,
                )
                errors.append({"file": str(path), "project_index": idx, "error": "Project entry is not a mapping"})
                continue
            try:
                projects.append(Project.model_validate(entry))
            except ValidationError as e:
                logger.error("Validation error for project", file=str(path), project_index=idx, error=str(e))
                errors.append({"file": str(path), "project_index": idx, "error": str(e)})

        if errors:
            raise RegistryConfigurationError(f"Registry file {path} contains {len(errors)} invalid project(s)", errors=errors)

        logger.info("Loaded project registry", file=str(path), project_count=len(projects))
        return cls(path, projects)

    @staticmethod
    def _load_yaml_file(path: Path) -> Any:
        """Read a YAML file, turning I/O and parse failures into RegistryConfigurationError."""
        try:
            with open(path, encoding="utf-8") as f:
                return yaml.load(f)
        except FileNotFoundError as e:
            logger.error("Registry file not found", file=str(path))
            raise RegistryConfigurationError(
                f"Registry file not found: {path.absolute()}",
                errors=[{"file": str(path), "error": "File not found"}],
            ) from e
        except YAMLError as e:
            logger.error("Failed to parse registry file", file=str(path), error=str(e))
            raise RegistryConfigurationError(
                f"Failed to parse registry file {path}: {e}",
                errors=[{"file": str(path), "error": f"YAML parsing error: {e}"}],
            ) from e

    def get_projects(self) -> Sequence[Project]:
        """Return the projects in file order."""
        return self._projects
