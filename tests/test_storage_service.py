"""
End-to-end scenarios through the StorageService façade.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote roster seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.core import config as core_config  # noqa: E402
from roster.domain.models import Lineup, Team, new_id  # noqa: E402
from roster.domain.results import ErrorKind, StoreUnavailableError  # noqa: E402
from roster.repositories.file_store import FileKeyValueStore  # noqa: E402
from roster.repositories.kv_store import MemoryKeyValueStore  # noqa: E402
from roster.services.storage_service import StorageService, build_storage_service  # noqa: E402


@pytest.fixture()
def store():
    return MemoryKeyValueStore()


@pytest.fixture()
def storage(store):
    return StorageService(store)


def test_team_lifecycle_scenario(storage):
    t1 = Team(id=new_id(), name="Test Team")
    assert storage.team.save_team(t1)
    assert storage.team.get_team(t1.id).name == "Test Team"

    assert storage.team.set_current_team_id(t1.id)
    assert storage.team.get_current_team_id() == t1.id

    assert storage.team.delete_team(t1.id)
    assert storage.team.get_team(t1.id) is None
    assert storage.team.get_current_team_id() is None


def test_default_lineup_scenario(storage):
    t2 = Team(id=new_id(), name="T2")
    storage.team.save_team(t2)
    l1 = Lineup(id=new_id(), team_id=t2.id, name="L1")
    l2 = Lineup(id=new_id(), team_id=t2.id, name="L2")
    assert storage.lineup.save_lineup(l1)
    assert storage.lineup.save_lineup(l2)

    assert storage.lineup.set_default_lineup(t2.id, l1.id)
    assert storage.lineup.set_default_lineup(t2.id, l2.id)

    assert storage.lineup.get_lineup(l1.id).is_default is False
    assert storage.lineup.get_lineup(l2.id).is_default is True


def test_mutations_report_store_unavailable(storage, store):
    storage.team.save_team(Team(id="t1", name="T1"))
    storage.lineup.save_lineup(Lineup(id="l1", team_id="t1", name="L1"))
    store.available = False

    for result in (
        storage.team.save_team(Team(id="t2", name="T2")),
        storage.team.set_current_team_id("t1"),
        storage.team.delete_team("t1"),
        storage.lineup.save_lineup(Lineup(id="l2", team_id="t1", name="L2")),
        storage.lineup.set_default_lineup("t1", "l1"),
        storage.lineup.delete_lineup("l1"),
    ):
        assert not result
        assert result.error is ErrorKind.STORE_UNAVAILABLE


def test_reads_raise_store_unavailable(storage, store):
    store.available = False
    with pytest.raises(StoreUnavailableError) as excinfo:
        storage.team.get_all_teams()
    assert excinfo.value.kind is ErrorKind.STORE_UNAVAILABLE
    with pytest.raises(StoreUnavailableError):
        storage.lineup.load_lineups("t1")


def test_is_available_probe(storage, store):
    assert storage.is_available()
    assert store.snapshot() == {}
    store.available = False
    assert storage.is_available() is False


def test_two_services_share_one_store(tmp_path):
    # two processes (e.g. browser tabs) pointed at the same directory
    first = StorageService(FileKeyValueStore(tmp_path))
    second = StorageService(FileKeyValueStore(tmp_path))
    first.team.save_team(Team(id="t1", name="Shared"))
    first.lineup.save_lineup(Lineup(id="l1", team_id="t1", name="L1"))
    second.lineup.save_lineup(Lineup(id="l2", team_id="t1", name="L2"))

    first.lineup.set_default_lineup("t1", "l1")
    second.lineup.set_default_lineup("t1", "l2")

    defaults = [lu.id for lu in first.lineup.load_lineups("t1") if lu.is_default]
    assert defaults == ["l2"]


def test_build_storage_service_uses_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "kv"))
    monkeypatch.setenv("STORAGE_KEY_PREFIX", "test_")
    core_config.get_settings.cache_clear()
    try:
        storage = build_storage_service()
        storage.team.save_team(Team(id="t1", name="T1"))
        assert (tmp_path / "kv" / "test_team%3At1.json").exists()
        assert (tmp_path / "kv" / "test_teams.json").exists()
    finally:
        core_config.get_settings.cache_clear()
