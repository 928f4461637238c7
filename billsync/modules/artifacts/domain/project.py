"""Direct references of a project: the seed of a bill."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import DEFAULT_EXTENSION
from .coordinate import ArtifactSet, Coordinate, artifact_set


@dataclass
class ManagedDependency:
    """A dependency-management entry; only pinned entries become seeds."""

    group_id: str
    artifact_id: str
    version: Optional[str] = None
    classifier: str = ""
    extension: str = DEFAULT_EXTENSION

    def to_coordinate(self) -> Optional[Coordinate]:
        if not self.version:
            return None
        return Coordinate(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            classifier=self.classifier,
            extension=self.extension or DEFAULT_EXTENSION,
        )


@dataclass
class ProjectReferences:
    artifact: Optional[Coordinate] = None
    parent: Optional[Coordinate] = None
    dependencies: List[Coordinate] = field(default_factory=list)
    plugins: List[Coordinate] = field(default_factory=list)
    reports: List[Coordinate] = field(default_factory=list)
    attached: List[Coordinate] = field(default_factory=list)
    dependency_management: List[ManagedDependency] = field(default_factory=list)

    def seed(self) -> ArtifactSet:
        """Union of every direct reference, including the project and its parent."""
        seeds = [*self.dependencies, *self.plugins, *self.reports, *self.attached]
        for candidate in (self.artifact, self.parent):
            if candidate is not None:
                seeds.append(candidate)
        for managed in self.dependency_management:
            coordinate = managed.to_coordinate()
            if coordinate is not None:
                seeds.append(coordinate)
        return artifact_set(seeds)
