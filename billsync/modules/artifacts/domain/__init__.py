from .coordinate import ArtifactSet, Coordinate, artifact_set, sort_coordinates
from .project import ManagedDependency, ProjectReferences
from .repository import Repository

__all__ = [
    "ArtifactSet",
    "Coordinate",
    "ManagedDependency",
    "ProjectReferences",
    "Repository",
    "artifact_set",
    "sort_coordinates",
]
