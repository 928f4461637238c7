"""Collector backed by a pre-resolved dependency graph document.

The document is JSON and has two sections::

    {
      "project": {
        "artifact": "com.acme:app:pom:1.0",
        "parent": "com.acme:parent:pom:1.0",
        "dependencies": ["com.acme:core:1.0"],
        "plugins": [], "reports": [], "attached": [],
        "dependencyManagement": [{"groupId": "com.acme", "artifactId": "util", "version": "1.0"}]
      },
      "artifacts": {
        "com.acme:core:jar:1.0": {
          "dependencies": ["com.acme:util:1.0", {"coordinate": "junit:junit:4.12", "scope": "test"}],
          "parent": "com.acme:parent:pom:1.0"
        }
      }
    }

Keys of ``artifacts`` may use any accepted coordinate spelling; they are
normalized to the canonical form on load.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from billsync.modules.artifacts.domain import Coordinate, ManagedDependency, ProjectReferences
from billsync.modules.artifacts.domain.constants import COMPILE_SCOPE, DEFAULT_EXTENSION
from billsync.modules.artifacts.exceptions import CollectionError, MalformedCoordinateError

log = logging.getLogger(__name__)

# scopes whose artifacts end up on a classpath resolved for the requested scope
SCOPE_INCLUDES: Dict[str, frozenset] = {
    COMPILE_SCOPE: frozenset({"compile", "runtime"}),
}


def _check_coordinate(value: str) -> str:
    try:
        Coordinate.parse(value)
    except MalformedCoordinateError as exc:
        raise ValueError(str(exc)) from exc
    return value


class DependencyEntry(BaseModel):
    coordinate: str
    scope: str = COMPILE_SCOPE
    optional: bool = False

    @field_validator("coordinate")
    @classmethod
    def _check(cls, value: str) -> str:
        return _check_coordinate(value)


class ArtifactNode(BaseModel):
    dependencies: List[DependencyEntry] = Field(default_factory=list)
    parent: Optional[str] = None
    error: Optional[str] = None

    @field_validator("dependencies", mode="before")
    @classmethod
    def _expand_shorthand(cls, value: object) -> object:
        if isinstance(value, list):
            return [{"coordinate": v} if isinstance(v, str) else v for v in value]
        return value

    @field_validator("parent")
    @classmethod
    def _check_parent(cls, value: Optional[str]) -> Optional[str]:
        return _check_coordinate(value) if value else None


class ManagedEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    group_id: str = Field(alias="groupId")
    artifact_id: str = Field(alias="artifactId")
    version: Optional[str] = None
    classifier: str = ""
    type: str = DEFAULT_EXTENSION

    @model_validator(mode="after")
    def _check_pinned(self) -> "ManagedEntry":
        if self.version:
            try:
                self.to_managed().to_coordinate()
            except MalformedCoordinateError as exc:
                raise ValueError(str(exc)) from exc
        return self

    def to_managed(self) -> ManagedDependency:
        return ManagedDependency(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            classifier=self.classifier,
            extension=self.type,
        )


class ProjectSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    artifact: Optional[str] = None
    parent: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    plugins: List[str] = Field(default_factory=list)
    reports: List[str] = Field(default_factory=list)
    attached: List[str] = Field(default_factory=list)
    dependency_management: List[ManagedEntry] = Field(default_factory=list, alias="dependencyManagement")

    @field_validator("dependencies", "plugins", "reports", "attached")
    @classmethod
    def _check_lists(cls, value: List[str]) -> List[str]:
        return [_check_coordinate(v) for v in value]

    @field_validator("artifact", "parent")
    @classmethod
    def _check_single(cls, value: Optional[str]) -> Optional[str]:
        return _check_coordinate(value) if value else None


class GraphDocument(BaseModel):
    project: ProjectSection = Field(default_factory=ProjectSection)
    artifacts: Dict[str, ArtifactNode] = Field(default_factory=dict)

    @field_validator("artifacts")
    @classmethod
    def _canonical_keys(cls, value: Dict[str, ArtifactNode]) -> Dict[str, ArtifactNode]:
        return {Coordinate.parse(_check_coordinate(key)).canonical: node for key, node in value.items()}


def _parse_optional(value: Optional[str]) -> Optional[Coordinate]:
    return Coordinate.parse(value) if value else None


class GraphFileCollector:
    """Serve dependency and parent lookups from a :class:`GraphDocument`."""

    def __init__(self, document: GraphDocument) -> None:
        self.document = document

    @classmethod
    def from_path(cls, path: Path) -> "GraphFileCollector":
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(f"Cannot read dependency graph {path}: {exc}") from exc
        return cls.from_json(raw)

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "GraphFileCollector":
        try:
            document = GraphDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise ValueError(f"Invalid dependency graph document: {exc}") from exc
        log.debug("Loaded dependency graph with %d artifacts", len(document.artifacts))
        return cls(document)

    def _node(self, coordinate: Coordinate) -> ArtifactNode:
        node = self.document.artifacts.get(coordinate.canonical)
        if node is None:
            raise CollectionError(coordinate, "artifact not found in dependency graph")
        if node.error:
            raise CollectionError(coordinate, node.error)
        return node

    def resolve_direct_dependencies(self, coordinate: Coordinate, scope: str) -> Sequence[Coordinate]:
        node = self._node(coordinate)
        accepted = SCOPE_INCLUDES.get(scope, frozenset({scope}))
        result: List[Coordinate] = []
        for entry in node.dependencies:
            if entry.optional or entry.scope not in accepted:
                continue
            result.append(Coordinate.parse(entry.coordinate))
        return result

    def parent_of(self, coordinate: Coordinate) -> Optional[Coordinate]:
        return _parse_optional(self._node(coordinate).parent)

    def project_references(self) -> ProjectReferences:
        project = self.document.project
        return ProjectReferences(
            artifact=_parse_optional(project.artifact),
            parent=_parse_optional(project.parent),
            dependencies=[Coordinate.parse(v) for v in project.dependencies],
            plugins=[Coordinate.parse(v) for v in project.plugins],
            reports=[Coordinate.parse(v) for v in project.reports],
            attached=[Coordinate.parse(v) for v in project.attached],
            dependency_management=[entry.to_managed() for entry in project.dependency_management],
        )
