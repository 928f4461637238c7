"""Artifact identity, repository handles and transports."""

from .domain import ArtifactSet, Coordinate, ProjectReferences, Repository
from .exceptions import BillSyncError, MalformedCoordinateError

__all__ = [
    "ArtifactSet",
    "BillSyncError",
    "Coordinate",
    "MalformedCoordinateError",
    "ProjectReferences",
    "Repository",
]
