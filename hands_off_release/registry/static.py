"""Registry holding a fixed, in-code list of projects."""

from collections.abc import Iterable, Sequence

from .base import Registry
from .models import Project


class StaticRegistry(Registry):
    """Registry backed by a list of projects given at construction time."""

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        self._projects = tuple(projects)

    def get_projects(self) -> Sequence[Project]:
        """Return the projects in the order they were given."""
        return self._projects
