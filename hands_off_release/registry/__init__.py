"""Registries supplying the ordered list of tracked projects."""

from .base import Registry
from .file import FileRegistry
from .models import Project, ProjectKind
from .static import StaticRegistry

__all__ = ["FileRegistry", "Project", "ProjectKind", "Registry", "StaticRegistry"]
