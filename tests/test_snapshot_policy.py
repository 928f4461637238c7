from billsync.modules.artifacts.domain import Coordinate
from billsync.modules.bill.policy import SnapshotPolicy


def test_snapshot_excluded_only_when_ignoring():
    policy = SnapshotPolicy()
    snapshot = Coordinate("g", "a", "1.0-SNAPSHOT")
    release = Coordinate("g", "a", "1.0")

    assert not policy.is_eligible(snapshot, ignore_snapshots=True)
    assert policy.is_eligible(snapshot, ignore_snapshots=False)
    assert policy.is_eligible(release, ignore_snapshots=True)
    assert policy.is_eligible(release, ignore_snapshots=False)


def test_entry_check_keeps_unparseable_lines():
    policy = SnapshotPolicy()

    assert not policy.is_eligible_entry("g:a:jar:1.0-SNAPSHOT", ignore_snapshots=True)
    assert policy.is_eligible_entry("g:a:jar:1.0", ignore_snapshots=True)
    assert policy.is_eligible_entry("not a coordinate", ignore_snapshots=True)
