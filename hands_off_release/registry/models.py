"""Pydantic schema for tracked projects."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProjectKind(str, Enum):
    """Source-control providers a project can be hosted on."""

    GITHUB = "github"


class Project(BaseModel):
    """Pydantic model for one tracked project.

    ``kind`` is kept as a plain string so that projects of providers this
    version does not support still load and can be rejected explicitly when
    a sync pass reaches them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    kind: str = ProjectKind.GITHUB.value
    owner: str = Field(min_length=1)
    repository: str = Field(min_length=1, alias="repo")
    environment: str = Field(min_length=1, alias="env")

    @property
    def full_name(self) -> str:
        """The project's 'owner/repository' name."""
        return f"{self.owner}/{self.repository}"
