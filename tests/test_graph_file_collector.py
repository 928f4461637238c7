import json

import pytest

from billsync.modules.artifacts.domain import Coordinate
from billsync.modules.artifacts.exceptions import CollectionError
from billsync.modules.bill.collect import GraphFileCollector

GRAPH = {
    "project": {
        "artifact": "com.acme:app:pom:1.0",
        "parent": "com.acme:parent:pom:1.0",
        "dependencies": ["com.acme:core:1.0"],
        "plugins": ["org.apache.maven.plugins:maven-jar-plugin:3.3.0"],
        "dependencyManagement": [
            {"groupId": "com.acme", "artifactId": "util", "version": "1.1"},
            {"groupId": "com.acme", "artifactId": "bom-only"},
        ],
    },
    "artifacts": {
        "com.acme:core:1.0": {
            "dependencies": [
                "com.acme:util:1.1",
                {"coordinate": "junit:junit:4.12", "scope": "test"},
                {"coordinate": "com.acme:runtime-only:1.0", "scope": "runtime"},
                {"coordinate": "com.acme:extra:1.0", "optional": True},
            ],
            "parent": "com.acme:parent:pom:1.0",
        },
        "com.acme:broken:jar:1.0": {"error": "invalid POM"},
    },
}


@pytest.fixture
def collector():
    return GraphFileCollector.from_json(json.dumps(GRAPH))


def test_direct_dependencies_follow_compile_classpath(collector):
    deps = collector.resolve_direct_dependencies(Coordinate.parse("com.acme:core:1.0"), "compile")

    assert [d.canonical for d in deps] == ["com.acme:util:jar:1.1", "com.acme:runtime-only:jar:1.0"]


def test_parent_lookup(collector):
    assert collector.parent_of(Coordinate.parse("com.acme:core:jar:1.0")) == Coordinate.parse(
        "com.acme:parent:pom:1.0"
    )


def test_missing_and_broken_nodes_raise(collector):
    with pytest.raises(CollectionError):
        collector.resolve_direct_dependencies(Coordinate.parse("com.acme:unknown:1.0"), "compile")
    with pytest.raises(CollectionError, match="invalid POM"):
        collector.parent_of(Coordinate.parse("com.acme:broken:1.0"))


def test_project_references(collector):
    refs = collector.project_references()

    assert refs.artifact == Coordinate.parse("com.acme:app:pom:1.0")
    assert {x.canonical for x in refs.seed()} == {
        "com.acme:app:pom:1.0",
        "com.acme:parent:pom:1.0",
        "com.acme:core:jar:1.0",
        "org.apache.maven.plugins:maven-jar-plugin:jar:3.3.0",
        "com.acme:util:jar:1.1",
    }


def test_from_path_reads_file(tmp_path):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(GRAPH), encoding="utf-8")

    assert GraphFileCollector.from_path(path).project_references().parent is not None


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"artifacts": {"bad key": {}}}),
        json.dumps({"project": {"dependencies": ["only:two"]}}),
    ],
)
def test_invalid_documents_raise_value_error(raw):
    with pytest.raises(ValueError):
        GraphFileCollector.from_json(raw)


def test_missing_file_raises_value_error(tmp_path):
    with pytest.raises(ValueError):
        GraphFileCollector.from_path(tmp_path / "nope.json")


def test_managed_entry_with_invalid_fields_is_rejected():
    raw = json.dumps(
        {"project": {"dependencyManagement": [{"groupId": "com.acme", "artifactId": "bad id", "version": "1.0"}]}}
    )

    with pytest.raises(ValueError):
        GraphFileCollector.from_json(raw)
