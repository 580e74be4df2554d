import os
import sys
from typing import Dict, List, Optional, Sequence

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from cubistgames.errors import TransportError
from cubistgames.schemas import GameRecord

FAR_FUTURE = 4102444800  # 2100-01-01
LONG_AGO = 1000


def make_game(game_id: int, state: str = "Closed", title: Optional[str] = None) -> GameRecord:
    """Build a game record whose raw fields classify as state"""
    data = {"gameId": game_id, "openTime": LONG_AGO, "closeTime": LONG_AGO}
    if state == "Open":
        data["closeTime"] = FAR_FUTURE
    elif state == "Settled":
        data["settled"] = True
    elif state == "Voided":
        data["voided"] = True
    elif state != "Closed":
        data["state"] = state
    return GameRecord.model_validate({
        "data": data,
        "cached": {"definition": {"title": title or f"Game {game_id}"}},
    })


class FakeGameSource:
    """In-memory batch fetcher that records every call"""

    def __init__(self, states: Dict[int, str], reverse: bool = False):
        self.games = {game_id: make_game(game_id, state) for game_id, state in states.items()}
        self.reverse = reverse
        self.calls: List[List[int]] = []
        self.fail_on_call: Optional[int] = None

    def fetch_games(self, game_ids: Sequence[int], authority: str) -> List[GameRecord]:
        self.calls.append(list(game_ids))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise TransportError("Failed to fetch games", status_code=503, endpoint="/api/games/batch")
        found = [self.games[game_id] for game_id in game_ids if game_id in self.games]
        # Real sources give no ordering guarantee
        return list(reversed(found)) if self.reverse else found


@pytest.fixture
def game_factory():
    return make_game


@pytest.fixture
def fake_source():
    def _build(states: Dict[int, str], **kwargs) -> FakeGameSource:
        return FakeGameSource(states, **kwargs)
    return _build
