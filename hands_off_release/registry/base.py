"""Base ABC for project registries."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import Project


class Registry(ABC):
    """Supplies the ordered projects whose environment tags are kept in sync."""

    @abstractmethod
    def get_projects(self) -> Sequence[Project]:
        """Return the tracked projects in registry order."""
        pass
