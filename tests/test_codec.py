"""
Codec behaviour: stored JSON shape and rejection of corrupted values.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Garante que o pacote roster seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.domain.models import Lineup, Team  # noqa: E402
from roster.domain.results import DecodeError  # noqa: E402
from roster.repositories import codec  # noqa: E402


def test_team_uses_camel_case_shape():
    team = Team(id="t1", name="Test Team", age_group="10U", season="Spring", created_at=5, updated_at=7)
    data = json.loads(codec.encode_team(team))
    assert data == {
        "id": "t1",
        "name": "Test Team",
        "ageGroup": "10U",
        "season": "Spring",
        "sport": "baseball",
        "createdAt": 5,
        "updatedAt": 7,
    }
    assert codec.decode_team(codec.encode_team(team)) == team


def test_lineup_positions_keep_display_order():
    lineup = Lineup(
        id="l1",
        team_id="t1",
        name="Opening Day",
        positions={"SS": "p3", "P": "p1", "C": "p2"},
        created_at=1,
        updated_at=1,
    )
    raw = codec.encode_lineup(lineup)
    assert [p["position"] for p in json.loads(raw)["positions"]] == ["SS", "P", "C"]
    decoded = codec.decode_lineup(raw)
    assert list(decoded.positions) == ["SS", "P", "C"]
    assert decoded == lineup


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[]",
        '"just a string"',
        '{"id": "t1", "name": "x"}',
        '{"id": "t1", "name": "x", "ageGroup": "", "season": "", "createdAt": "yesterday", "updatedAt": 1}',
        '{"id": "t1", "name": "x", "ageGroup": "", "season": "", "createdAt": true, "updatedAt": 1}',
    ],
)
def test_decode_team_rejects_corrupted_values(raw):
    with pytest.raises(DecodeError):
        codec.decode_team(raw)


def test_decode_lineup_rejects_duplicate_slots():
    raw = json.dumps(
        {
            "id": "l1",
            "teamId": "t1",
            "name": "Dup",
            "isDefault": False,
            "positions": [{"position": "P", "playerId": "a"}, {"position": "P", "playerId": "b"}],
            "createdAt": 1,
            "updatedAt": 1,
        }
    )
    with pytest.raises(DecodeError):
        codec.decode_lineup(raw)


def test_team_value_is_not_a_lineup():
    raw = codec.encode_team(Team(id="t1", name="Team"))
    with pytest.raises(DecodeError):
        codec.decode_lineup(raw)


def test_index_and_pointer_helpers():
    assert codec.decode_ids(None) == []
    assert codec.decode_ids(codec.encode_ids(["a", "b"])) == ["a", "b"]
    with pytest.raises(DecodeError):
        codec.decode_ids('{"a": 1}')
    assert codec.decode_pointer(None) is None
    assert codec.decode_pointer(codec.encode_pointer("t1")) == "t1"
    assert codec.decode_pointer("null") is None
    with pytest.raises(DecodeError):
        codec.decode_pointer("42")


@pytest.mark.parametrize("stamp", ["NaN", "Infinity", "-Infinity", "1e400"])
def test_non_finite_timestamps_are_decode_errors(stamp):
    team_raw = (
        '{"id":"t1","name":"x","ageGroup":"","season":"","createdAt":%s,"updatedAt":1}' % stamp
    )
    lineup_raw = (
        '{"id":"l1","teamId":"t1","name":"x","isDefault":false,"positions":[],'
        '"createdAt":1,"updatedAt":%s}' % stamp
    )
    with pytest.raises(DecodeError):
        codec.decode_team(team_raw)
    with pytest.raises(DecodeError):
        codec.decode_lineup(lineup_raw)


def test_null_sport_falls_back_to_baseball():
    raw = '{"id":"t1","name":"x","ageGroup":"","season":"","sport":null,"createdAt":1,"updatedAt":1}'
    assert codec.decode_team(raw).sport == "baseball"
    assert codec.decode_team(raw.replace('"sport":null,', "")).sport == "baseball"
