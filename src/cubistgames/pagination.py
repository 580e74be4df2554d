"""
Paginated game discovery.

Games are created with increasing ids and usually settle in roughly the order
they were created, so the listing walks ids downward from the newest game and
pauses at the first batch that ends on a Settled game. Older games are then
fetched on demand ("load more") from the returned frontier.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence

from .game_state import bucket_for, game_state
from .schemas import GameRecord, LifecycleState, ResultsByState

logger = logging.getLogger(__name__)

STOP_EXHAUSTED = "exhausted"
STOP_SETTLED = "settled"


class GameFetcher(Protocol):
    def fetch_games(self, game_ids: Sequence[int], authority: str) -> List[GameRecord]:
        ...


BatchCallback = Callable[[int, List[GameRecord]], None]


def game_batch(last_game_id: int, batch_size: int) -> List[int]:
    """
    Ids to fetch next, from last_game_id downward.

    Args:
        last_game_id: Highest id still to fetch (0 when there is nothing left)
        batch_size: Maximum number of ids to return

    Returns:
        Strictly descending ids, all greater than zero, at most batch_size long
    """
    if last_game_id < 0:
        raise ValueError(f"last_game_id must be >= 0, got {last_game_id}")
    if batch_size <= 0:
        raise ValueError(f"batch_size must be > 0, got {batch_size}")
    return list(range(last_game_id, max(last_game_id - batch_size, 0), -1))


@dataclass
class PageResult:
    """Outcome of a fetch_more call"""
    results: ResultsByState
    next_game_id: int
    batches: int = 0  # 0 means nothing was fetched at all
    records: int = 0
    stop_reason: str = STOP_EXHAUSTED

    @property
    def has_more(self) -> bool:
        return self.next_game_id > 0


class GamePaginator:
    """Walks an authority's games in descending id order, one batch at a time"""

    def __init__(self, client: GameFetcher, authority: str, batch_size: int = 10):
        """
        Args:
            client: Batch fetcher, usually a GameClient
            authority: Public key that owns the games
            batch_size: Default number of ids requested per batch
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be > 0, got {batch_size}")
        self.client = client
        self.authority = authority
        self.batch_size = batch_size

    def _fetch_batch(self, game_ids: List[int]) -> List[GameRecord]:
        """Fetch a batch and put it in descending id order, dropping strays"""
        requested = set(game_ids)
        seen = set()
        games = []
        for game in sorted(self.client.fetch_games(game_ids, self.authority),
                           key=lambda g: g.game_id, reverse=True):
            if game.game_id not in requested:
                logger.warning(f"Ignoring game {game.game_id}: not part of the requested batch")
                continue
            if game.game_id in seen:
                logger.warning(f"Ignoring duplicate game {game.game_id} in batch")
                continue
            seen.add(game.game_id)
            games.append(game)
        return games

    def fetch_more(
        self,
        results: ResultsByState,
        start_id: int,
        batch_size: Optional[int] = None,
        on_batch: Optional[BatchCallback] = None,
    ) -> PageResult:
        """
        Fetch and bucket games from start_id downward.

        Batches are fetched one at a time. Descent continues while ids remain
        and the last game of the batch is not Settled. A Voided game does not
        stop the descent even though it is displayed with the settled games.

        New games are appended to results only once the whole call succeeds;
        if a batch fails to load or classify, the error propagates and
        results is left as it was.

        Args:
            results: Buckets to append to (owned by the caller)
            start_id: Frontier to start from
            batch_size: Ids per batch (defaults to the paginator's batch size)
            on_batch: Called with (next frontier, games) after every batch.
                This reports staged progress only: if a later batch fails,
                none of the reported games reach results and the caller's
                frontier stays at start_id.

        Returns:
            PageResult with the updated results and the new frontier
        """
        if batch_size is None:
            batch_size = self.batch_size
        now = int(time.time())
        staged = ResultsByState()
        frontier = start_id
        batches = 0
        stop_reason = STOP_EXHAUSTED

        while True:
            game_ids = game_batch(frontier, batch_size)
            if not game_ids:
                frontier = 0
                break

            logger.debug(f"Fetching games {game_ids[0]}..{game_ids[-1]}")
            games = self._fetch_batch(game_ids)
            batches += 1

            last_state = None
            for game in games:
                last_state = game_state(game, now=now)
                staged.append(bucket_for(last_state), game)

            frontier = game_ids[-1] - 1
            logger.debug(f"Batch {batches}: {len(games)}/{len(game_ids)} games, next id {frontier}")
            if on_batch is not None:
                on_batch(frontier, games)

            if not frontier:
                break
            if last_state is LifecycleState.SETTLED:
                stop_reason = STOP_SETTLED
                break

        results.extend(staged)
        logger.info(
            f"Loaded {staged.total} games in {batches} batch(es), "
            f"next id {frontier} ({stop_reason})"
        )
        return PageResult(
            results=results,
            next_game_id=frontier,
            batches=batches,
            records=staged.total,
            stop_reason=stop_reason,
        )
