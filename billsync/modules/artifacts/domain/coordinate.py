"""Canonical artifact identity used by bill generation and tree sync."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import FrozenSet, Iterable, List

from ..exceptions import MalformedCoordinateError
from .constants import DEFAULT_EXTENSION, SNAPSHOT_SUFFIX

# deployed snapshot versions look like 1.0-20150102.030405-7
_TIMESTAMPED_SNAPSHOT = re.compile(r"^(.*-)?([0-9]{8}\.[0-9]{6}-[0-9]+)$")

ArtifactSet = FrozenSet["Coordinate"]


@total_ordering
@dataclass(frozen=True)
class Coordinate:
    """One artifact: groupId, artifactId, version, classifier and extension.

    Equality covers all five fields, so two versions of the same artifact are
    different coordinates. Ordering follows the canonical string, which is
    also the manifest line format.
    """

    group_id: str
    artifact_id: str
    version: str
    classifier: str = ""
    extension: str = DEFAULT_EXTENSION

    def __post_init__(self) -> None:
        fields = (self.group_id, self.artifact_id, self.version, self.classifier, self.extension)
        text = ":".join(str(value) for value in fields)
        if not all(isinstance(value, str) for value in fields):
            raise MalformedCoordinateError(text, "every field must be a string")
        if not self.group_id or not self.artifact_id or not self.version:
            raise MalformedCoordinateError(text, "groupId, artifactId and version are required")
        if not self.extension:
            raise MalformedCoordinateError(text, "extension is required")
        # canonical strings are colon separated, one per manifest line
        if any(":" in value or any(ch.isspace() for ch in value) for value in fields):
            raise MalformedCoordinateError(text, "fields may not contain ':' or whitespace")

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Parse ``groupId:artifactId[:extension[:classifier]]:version``."""
        if not isinstance(text, str):
            raise MalformedCoordinateError(repr(text), "not a string")
        raw = text.strip()
        segments = raw.split(":")
        if not 3 <= len(segments) <= 5:
            raise MalformedCoordinateError(text)
        if any(ch.isspace() for ch in raw):
            raise MalformedCoordinateError(text, "whitespace is not allowed")

        group_id, artifact_id, version = segments[0], segments[1], segments[-1]
        extension = segments[2] if len(segments) >= 4 else ""
        classifier = segments[3] if len(segments) == 5 else ""
        if not group_id or not artifact_id or not version:
            raise MalformedCoordinateError(text, "groupId, artifactId and version are required")
        return cls(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            classifier=classifier,
            extension=extension or DEFAULT_EXTENSION,
        )

    @property
    def canonical(self) -> str:
        parts = [self.group_id, self.artifact_id, self.extension]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)

    @property
    def is_snapshot(self) -> bool:
        return self.version.endswith(SNAPSHOT_SUFFIX) or bool(_TIMESTAMPED_SNAPSHOT.match(self.version))

    @property
    def base_version(self) -> str:
        """Version with a deployment timestamp folded back into ``-SNAPSHOT``."""
        match = _TIMESTAMPED_SNAPSHOT.match(self.version)
        if not match:
            return self.version
        return f"{match.group(1) or ''}{SNAPSHOT_SUFFIX}"

    @property
    def file_name(self) -> str:
        classifier = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifact_id}-{self.version}{classifier}.{self.extension}"

    @property
    def path_segments(self) -> List[str]:
        """Maven-2 repository layout: group path, artifactId, version, file name."""
        group_path = self.group_id.replace(".", "/")
        return [group_path, self.artifact_id, self.base_version, self.file_name]

    def layout_path(self, suffix: str = "") -> str:
        return "/".join(self.path_segments) + suffix

    def __str__(self) -> str:
        return self.canonical

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.canonical < other.canonical


def artifact_set(coordinates: Iterable[Coordinate]) -> ArtifactSet:
    return frozenset(coordinates)


def sort_coordinates(coordinates: Iterable[Coordinate]) -> List[Coordinate]:
    """Return coordinates in canonical (manifest) order."""
    return sorted(coordinates, key=lambda c: c.canonical)
