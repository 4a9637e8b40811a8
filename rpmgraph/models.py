"""
Pydantic models describing packages and the outcome of a build.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from rpmgraph.constants import Arch, SkipReason
from rpmgraph.validators import NonEmptyString


class Package(BaseModel):
    """A package file together with the requirements it declares."""
    model_config = ConfigDict(frozen=True)

    name: NonEmptyString = Field(description="Package name without version, release or architecture")
    version: NonEmptyString = Field(description="Package version (e.g., '2.2.51')")
    release: NonEmptyString = Field(description="Package release, may include a dist tag (e.g., '12.el7')")
    arch: Arch = Field(description="Package architecture")
    dependencies: tuple[str, ...] = Field(
        default=(),
        description="Names of the declared requirements, in query output order",
    )
    path: Path | None = Field(default=None, description="File the package was read from")

    @property
    def nvra(self) -> str:
        return f"{self.name}-{self.version}-{self.release}.{self.arch}"


class SkippedFile(BaseModel):
    """A candidate file that contributed nothing to the map."""
    path: Path = Field(description="Path of the skipped file")
    reason: SkipReason = Field(description="Why the file was skipped")
    details: str = Field(default="", description="Error message describing the failure")


class BuildResult(BaseModel):
    """Outcome of building the reverse-dependency map over a set of files."""
    dependents: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Dependency name to the names of the packages that require it",
    )
    packages: list[str] = Field(
        default_factory=list,
        description="Names of the packages recorded, in completion order",
    )
    skipped: list[SkippedFile] = Field(default_factory=list, description="Files that were skipped")

    @property
    def pair_count(self) -> int:
        return sum(len(names) for names in self.dependents.values())

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
