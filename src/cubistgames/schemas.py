"""
Data models for game records, stats and bucketed results.

Wire payloads from the games API use camelCase keys; the models expose
snake_case attributes and accept either form.
"""
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class LifecycleState(str, Enum):
    """Raw lifecycle state reported for a game"""
    OPEN = "Open"
    CLOSED = "Closed"
    SETTLED = "Settled"
    VOIDED = "Voided"


# Display buckets, in display order. Voided games are shown as Settled.
BUCKETS: Tuple[LifecycleState, ...] = (
    LifecycleState.OPEN,
    LifecycleState.CLOSED,
    LifecycleState.SETTLED,
)


class GameData(BaseModel):
    """Raw on-chain fields of a game account"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    game_id: int = Field(alias="gameId", ge=1)
    open_time: Optional[int] = Field(default=None, alias="openTime")
    close_time: Optional[int] = Field(default=None, alias="closeTime")
    settled: bool = False
    voided: bool = False
    # Some indexers report the program's own label; classification validates it
    state: Optional[str] = None


class GameDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None


class GameCache(BaseModel):
    """Off-chain view of a game, resolved from its definition file"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    definition: Optional[GameDefinition] = None


class GameRecord(BaseModel):
    """A single game as returned by the games API"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data: GameData
    cached: GameCache = Field(default_factory=GameCache)

    @property
    def game_id(self) -> int:
        return self.data.game_id

    @property
    def title(self) -> Optional[str]:
        if self.cached.definition is None:
            return None
        return self.cached.definition.title


class GameStats(BaseModel):
    """Per-authority counters; total_games is the highest game id created"""
    model_config = ConfigDict(populate_by_name=True)

    total_games: int = Field(alias="totalGames", ge=0)


class ResultsByState:
    """
    Games grouped into the Open, Closed and Settled display buckets.

    Insertion order is kept within a bucket, so games fetched earlier
    (higher ids) stay ahead of games fetched later.
    """

    def __init__(self, buckets: Optional[Dict[LifecycleState, List[GameRecord]]] = None):
        self._buckets: Dict[LifecycleState, List[GameRecord]] = {state: [] for state in BUCKETS}
        for state, games in (buckets or {}).items():
            self[state].extend(games)

    def __getitem__(self, state) -> List[GameRecord]:
        try:
            state = LifecycleState(state)
        except ValueError:
            raise KeyError(f"{state!r} is not a lifecycle state") from None
        if state not in self._buckets:
            raise KeyError(f"{state.value} is not a display bucket")
        return self._buckets[state]

    def __iter__(self) -> Iterator[Tuple[LifecycleState, List[GameRecord]]]:
        return iter(self._buckets.items())

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResultsByState):
            return NotImplemented
        return self._buckets == other._buckets

    def __repr__(self) -> str:
        counts = ", ".join(f"{state.value}={len(games)}" for state, games in self)
        return f"ResultsByState({counts})"

    def append(self, state: LifecycleState, game: GameRecord):
        self[state].append(game)

    def extend(self, other: "ResultsByState"):
        """Append every bucket of other onto the matching bucket here"""
        for state, games in other:
            self._buckets[state].extend(games)

    def copy(self) -> "ResultsByState":
        return ResultsByState(self._buckets)

    @property
    def total(self) -> int:
        return sum(len(games) for games in self._buckets.values())

    def game_ids(self, state: LifecycleState) -> List[int]:
        return [game.game_id for game in self[state]]


class ClientConfig(BaseModel):
    """Connection settings for one named profile"""
    model_config = ConfigDict(extra="forbid")

    name: str
    api_url: Optional[str] = None
    authority: Optional[str] = None
    batch_size: int = Field(default=10, gt=0)
    timeout: float = Field(default=10, gt=0)
    retries: int = Field(default=3, ge=0)


class GamesPage(BaseModel):
    """Envelope of a batch response from the games API"""
    games: List[GameRecord] = Field(default_factory=list)
