"""
Tests for lifecycle classification of game records.
"""
import pytest

from cubistgames.errors import ClassificationAmbiguous
from cubistgames.game_state import bucket_for, game_state
from cubistgames.schemas import GameRecord, LifecycleState


def record(**data):
    data.setdefault("gameId", 1)
    return GameRecord.model_validate({"data": data})


def test_open_before_close_time():
    game = record(openTime=100, closeTime=200)
    assert game_state(game, now=150) is LifecycleState.OPEN


def test_not_yet_opened_counts_as_open():
    game = record(openTime=100, closeTime=200)
    assert game_state(game, now=50) is LifecycleState.OPEN


def test_closed_at_and_after_close_time():
    game = record(openTime=100, closeTime=200)
    assert game_state(game, now=200) is LifecycleState.CLOSED
    assert game_state(game, now=10_000) is LifecycleState.CLOSED


def test_settled_flag_wins_over_time_window():
    game = record(openTime=100, closeTime=200, settled=True)
    assert game_state(game, now=150) is LifecycleState.SETTLED


def test_voided_is_reported_as_voided():
    game = record(openTime=100, closeTime=200, voided=True)
    assert game_state(game, now=300) is LifecycleState.VOIDED


def test_explicit_state_label_is_trusted():
    game = record(state="Settled")
    assert game_state(game) is LifecycleState.SETTLED


def test_classification_is_idempotent():
    game = record(openTime=100, closeTime=200)
    assert game_state(game, now=150) == game_state(game, now=150)


@pytest.mark.parametrize("data,reason", [
    ({"state": "Paused"}, "state"),
    ({"settled": True, "voided": True, "closeTime": 200}, "settled/voided"),
    ({"openTime": 100}, "close_time"),
])
def test_ambiguous_records_raise(data, reason):
    with pytest.raises(ClassificationAmbiguous) as exc_info:
        game_state(record(gameId=7, **data), now=150)
    assert exc_info.value.game_id == 7
    assert exc_info.value.reason == reason


def test_bucket_policy_folds_voided_into_settled():
    assert bucket_for(LifecycleState.VOIDED) is LifecycleState.SETTLED
    assert bucket_for(LifecycleState.SETTLED) is LifecycleState.SETTLED
    assert bucket_for(LifecycleState.OPEN) is LifecycleState.OPEN
    assert bucket_for(LifecycleState.CLOSED) is LifecycleState.CLOSED


def test_records_accept_snake_case_fields():
    game = GameRecord(data={"game_id": 3, "close_time": 200})
    assert game.game_id == 3
    assert game.title is None
    assert game_state(game, now=100) is LifecycleState.OPEN
