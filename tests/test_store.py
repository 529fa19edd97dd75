"""
Unit tests for the PlayerStateStore and the update schema.
"""

import pytest
from pydantic import ValidationError

from scoresync.relay import encode_snapshot
from scoresync.schemas import PlayerUpdate
from scoresync.store import PlayerStateStore


def test_snapshot_empty_initially():
    assert dict(PlayerStateStore().snapshot()) == {}


def test_last_write_wins():
    store = PlayerStateStore()
    store.set_score("Alice", 5)
    store.set_score("Bob", "3")
    store.set_score("Alice", 7)
    assert dict(store.snapshot()) == {"Alice": 7, "Bob": "3"}
    assert len(store) == 2


def test_snapshot_does_not_see_later_writes():
    store = PlayerStateStore()
    store.set_score("Alice", 5)
    snap = store.snapshot()
    store.set_score("Alice", 6)
    store.set_score("Bob", 1)
    assert dict(snap) == {"Alice": 5}


def test_snapshot_is_read_only():
    store = PlayerStateStore()
    store.set_score("Alice", 5)
    with pytest.raises(TypeError):
        store.snapshot()["Alice"] = 1


def test_score_stored_verbatim():
    store = PlayerStateStore()
    store.set_score("Alice", {"nested": [1, None]})
    assert store.get("Alice") == {"nested": [1, None]}
    assert store.get("Nobody") is None
    assert "Alice" in store


def test_player_update_rejects_non_finite_scores():
    with pytest.raises(ValidationError):
        PlayerUpdate.model_validate_json('{"playerId": "Eve", "score": NaN}')
    with pytest.raises(ValidationError):
        PlayerUpdate.model_validate_json('{"playerId": "Eve", "score": 1e400}')
    assert PlayerUpdate.model_validate_json('{"playerId": "Eve", "score": 1.5}').score == 1.5


def test_encode_snapshot_refuses_nan():
    with pytest.raises(ValueError):
        encode_snapshot({"Eve": float("nan")})
    assert encode_snapshot({"Alice": 5}) == '{"Alice":5}'
