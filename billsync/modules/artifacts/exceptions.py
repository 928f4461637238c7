"""Error taxonomy shared by bill generation and tree sync."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .domain.coordinate import Coordinate


class BillSyncError(RuntimeError):
    """Base class for all billsync failures."""


class MalformedCoordinateError(BillSyncError, ValueError):
    """Raised when a coordinate string does not split into the expected segments."""

    def __init__(self, text: str, reason: str = "expected groupId:artifactId[:extension[:classifier]]:version") -> None:
        super().__init__(f"Malformed coordinate {text!r}: {reason}")
        self.text = text


class CollectionError(BillSyncError):
    """A single collector or parent lookup failed."""

    def __init__(self, coordinate: "Coordinate", message: str) -> None:
        super().__init__(f"Problem collecting {coordinate}: {message}")
        self.coordinate = coordinate


class ManifestError(BillSyncError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class ManifestReadError(ManifestError):
    """The existing manifest could not be read."""


class ManifestWriteError(ManifestError):
    """The merged manifest could not be written."""


class UnknownTargetRepositoryError(BillSyncError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid sync target {name!r}. Must be either a configured repository id "
            "or an existing local folder."
        )
        self.name = name


class ArtifactResolutionError(BillSyncError):
    """Artifact bytes could not be fetched from the given repositories."""

    def __init__(self, coordinate: "Coordinate", causes: Optional[Dict[str, str]] = None) -> None:
        self.coordinate = coordinate
        self.causes: Dict[str, str] = dict(causes or {})
        detail = "; ".join(f"{repo}: {cause}" for repo, cause in self.causes.items())
        super().__init__(f"Cannot resolve {coordinate}" + (f" ({detail})" if detail else ""))


class ArtifactDeployError(BillSyncError):
    """Raised by deployers when the target rejects an artifact."""


class UnresolvableArtifactError(BillSyncError):
    """Outcome error: no source repository could provide the artifact."""

    def __init__(self, coordinate: "Coordinate", cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Cannot resolve artifact {coordinate} at all" + (f": {cause}" if cause else ""))
        self.coordinate = coordinate
        self.cause = cause


class DeployFailedError(BillSyncError):
    """Outcome error: the artifact was fetched but the target rejected it."""

    def __init__(self, coordinate: "Coordinate", cause: BaseException) -> None:
        super().__init__(f"Deployment failed for artifact {coordinate}: {cause}")
        self.coordinate = coordinate
        self.cause = cause
