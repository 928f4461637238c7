import pytest

from billsync.modules.artifacts.domain import Coordinate
from billsync.modules.artifacts.exceptions import ManifestReadError
from billsync.modules.bill import BillService
from billsync.settings import Settings


def c(text):
    return Coordinate.parse(text)


class FakeCollector:
    def __init__(self, graph=None, parents=None):
        self.graph = {c(k): [c(v) for v in vs] for k, vs in (graph or {}).items()}
        self.parents = {c(k): c(v) for k, v in (parents or {}).items()}
        self.calls = 0

    def resolve_direct_dependencies(self, coordinate, scope):
        self.calls += 1
        return self.graph.get(coordinate, [])

    def parent_of(self, coordinate):
        return self.parents.get(coordinate)


def make_service(tmp_path, **overrides):
    settings = Settings(_env_file=None, bill_path=str(tmp_path / "bill.txt"), **overrides)
    return BillService(settings)


def test_generate_writes_sorted_closure(tmp_path):
    svc = make_service(tmp_path)
    fake = FakeCollector(
        graph={"com.acme:core:1.0": ["com.acme:util:1.0"]},
        parents={"com.acme:util:1.0": "com.acme:parent:1.0"},
    )

    result = svc.generate([c("com.acme:core:1.0")], fake, fake)

    assert (tmp_path / "bill.txt").read_text(encoding="utf-8").splitlines() == [
        "com.acme:core:jar:1.0",
        "com.acme:parent:jar:1.0",
        "com.acme:util:jar:1.0",
    ]
    assert result.count == 3
    assert result.added == 3
    assert result.exit_code == 0


def test_empty_closure_keeps_prior_manifest(tmp_path):
    bill = tmp_path / "bill.txt"
    bill.write_text("a:a:jar:1.0\n", encoding="utf-8")
    svc = make_service(tmp_path)
    fake = FakeCollector()

    result = svc.generate([], fake, fake)

    assert bill.read_text(encoding="utf-8") == "a:a:jar:1.0\n"
    assert result.count == 1
    assert result.added == 0


def test_snapshots_filtered_by_default_and_kept_on_request(tmp_path):
    svc = make_service(tmp_path)
    fake = FakeCollector(graph={"g:app:1.0": ["g:dev:2.0-SNAPSHOT"]})

    svc.generate([c("g:app:1.0")], fake, fake)
    assert (tmp_path / "bill.txt").read_text(encoding="utf-8") == "g:app:jar:1.0\n"

    svc.generate([c("g:app:1.0")], fake, fake, ignore_snapshots=False)
    assert (tmp_path / "bill.txt").read_text(encoding="utf-8") == "g:app:jar:1.0\ng:dev:jar:2.0-SNAPSHOT\n"


def test_unreadable_manifest_aborts_before_collection(tmp_path):
    (tmp_path / "bill.txt").mkdir()
    svc = make_service(tmp_path)
    fake = FakeCollector(graph={"g:a:1.0": ["g:b:1.0"]})

    with pytest.raises(ManifestReadError):
        svc.generate([c("g:a:1.0")], fake, fake)

    assert fake.calls == 0


def test_explicit_manifest_path_overrides_settings(tmp_path):
    svc = make_service(tmp_path)
    fake = FakeCollector()
    other = tmp_path / "nested" / "other-bill.txt"

    result = svc.generate([c("g:a:1.0")], fake, fake, manifest_path=other)

    assert result.manifest_path == other
    assert other.read_text(encoding="utf-8") == "g:a:jar:1.0\n"
    assert not (tmp_path / "bill.txt").exists()


def test_collection_failures_exit_nonzero_but_bill_is_written(tmp_path):
    class Flaky(FakeCollector):
        def resolve_direct_dependencies(self, coordinate, scope):
            if coordinate.artifact_id == "broken":
                raise RuntimeError("timeout")
            return super().resolve_direct_dependencies(coordinate, scope)

    svc = make_service(tmp_path)
    fake = Flaky(graph={"g:ok:1.0": ["g:ok-dep:1.0"]})

    result = svc.generate([c("g:ok:1.0"), c("g:broken:1.0")], fake, fake)

    assert result.exit_code == 1
    assert result.failures == {"g:broken:jar:1.0": "timeout"}
    assert result.as_dict()["exitCode"] == 1
    assert (tmp_path / "bill.txt").read_text(encoding="utf-8").splitlines() == [
        "g:broken:jar:1.0",
        "g:ok-dep:jar:1.0",
        "g:ok:jar:1.0",
    ]


def test_skip_cached_seeds_uses_existing_bill(tmp_path):
    (tmp_path / "bill.txt").write_text("g:cached:jar:1.0\n", encoding="utf-8")
    svc = make_service(tmp_path, skip_cached_seeds=True)
    fake = FakeCollector(graph={"g:cached:1.0": ["g:hidden:1.0"]})

    result = svc.generate([c("g:cached:1.0")], fake, fake)

    assert fake.calls == 0
    assert result.count == 1


def test_dry_run_renders_without_writing(tmp_path):
    bill = tmp_path / "bill.txt"
    bill.write_text("z:z:jar:1.0\n", encoding="utf-8")
    svc = make_service(tmp_path)
    fake = FakeCollector()

    result = svc.generate([c("a:a:1.0")], fake, fake, dry_run=True)

    assert result.content == "a:a:jar:1.0\nz:z:jar:1.0\n"
    assert result.as_dict()["content"] == result.content
    assert bill.read_text(encoding="utf-8") == "z:z:jar:1.0\n"


def test_incomplete_closure_exits_nonzero(tmp_path):
    fake = FakeCollector(graph={"g:a:1.0": ["g:b:1.0"], "g:b:1.0": ["g:c:1.0"]})
    svc = make_service(tmp_path, closure_max_passes=1)

    result = svc.generate([c("g:a:1.0")], fake, fake)

    assert not result.complete
    assert result.exit_code == 1
    assert (tmp_path / "bill.txt").read_text(encoding="utf-8") == "g:a:jar:1.0\ng:b:jar:1.0\n"
