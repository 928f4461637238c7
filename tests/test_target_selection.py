import pytest

from billsync.modules.artifacts.domain import Repository
from billsync.modules.artifacts.exceptions import UnknownTargetRepositoryError
from billsync.modules.treesync.service import select_target_repository

REMOTES = [
    Repository("central", "https://repo1.example.com/maven2"),
    Repository("internal", "https://nexus.example.com/repository/releases"),
]


def test_configured_id_wins():
    assert select_target_repository("internal", REMOTES) is REMOTES[1]


def test_existing_folder_becomes_local_repository(tmp_path):
    repo = select_target_repository(str(tmp_path), REMOTES)

    assert repo.id == "local-delta"
    assert repo.is_local
    assert repo.local_path == tmp_path.resolve()


def test_id_match_is_preferred_over_folder(tmp_path, monkeypatch):
    (tmp_path / "central").mkdir()
    monkeypatch.chdir(tmp_path)

    assert select_target_repository("central", REMOTES) is REMOTES[0]


@pytest.mark.parametrize("name", ["", "nowhere"])
def test_unknown_target_raises(name, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(UnknownTargetRepositoryError):
        select_target_repository(name, REMOTES)


def test_regular_file_is_not_a_target(tmp_path):
    path = tmp_path / "bill.txt"
    path.write_text("", encoding="utf-8")

    with pytest.raises(UnknownTargetRepositoryError):
        select_target_repository(str(path), REMOTES)
