"""
Lifecycle classification for game records.

game_state() always reports the true underlying state. Collapsing Voided
games into the Settled bucket is a display policy and lives in bucket_for().
"""
import time
from typing import Optional

from .errors import ClassificationAmbiguous
from .schemas import GameRecord, LifecycleState

_KNOWN_STATES = {state.value: state for state in LifecycleState}


def game_state(record: GameRecord, now: Optional[int] = None) -> LifecycleState:
    """
    Classify a game record by its raw state fields.

    Args:
        record: Game record to classify
        now: Unix timestamp to compare time windows against (defaults to now)

    Returns:
        The raw lifecycle state of the game

    Raises:
        ClassificationAmbiguous: If the raw fields don't map to exactly one state
    """
    data = record.data

    if data.state is not None:
        state = _KNOWN_STATES.get(data.state)
        if state is None:
            raise ClassificationAmbiguous(
                f"Game {data.game_id} has unknown state '{data.state}'",
                game_id=data.game_id,
                reason="state",
            )
        return state

    if data.settled and data.voided:
        raise ClassificationAmbiguous(
            f"Game {data.game_id} is flagged both settled and voided",
            game_id=data.game_id,
            reason="settled/voided",
        )
    if data.voided:
        return LifecycleState.VOIDED
    if data.settled:
        return LifecycleState.SETTLED

    if data.close_time is None:
        raise ClassificationAmbiguous(
            f"Game {data.game_id} has no close time and is not settled",
            game_id=data.game_id,
            reason="close_time",
        )

    if now is None:
        now = int(time.time())
    # Games that have not opened yet are still listed with the open ones
    if now < data.close_time:
        return LifecycleState.OPEN
    return LifecycleState.CLOSED


def bucket_for(state: LifecycleState) -> LifecycleState:
    """Map a raw state onto its display bucket"""
    if state is LifecycleState.VOIDED:
        return LifecycleState.SETTLED
    return state
