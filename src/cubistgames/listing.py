"""
Game listing state for display.

GameListing owns the buckets currently on screen together with the frontier
for the next "load more". It allows one page load at a time.
"""
import logging
import re
import threading
from typing import Any, Dict, Optional

from .errors import PaginationInProgressError
from .game_client import game_payload
from .pagination import GamePaginator, PageResult
from .schemas import GameRecord, ResultsByState

logger = logging.getLogger(__name__)

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, dash-separated form of text for use in URLs"""
    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


def game_url(game: GameRecord) -> str:
    """Link to a game's page, e.g. /game/who-wins-the-final?id=25"""
    return f"/game/{slugify(game.title or '')}?id={game.game_id}"


class GameListing:
    """Displayed games plus the frontier for loading more"""

    def __init__(self, paginator: GamePaginator):
        self.paginator = paginator
        self.results = ResultsByState()
        self.next_game_id = 0
        self.last_page: Optional[PageResult] = None
        self._lock = threading.Lock()

    @property
    def has_more(self) -> bool:
        return self.next_game_id > 0

    def _load(self, start_id: Optional[int] = None) -> PageResult:
        """Run one page load; start_id None continues from the frontier"""
        if not self._lock.acquire(blocking=False):
            raise PaginationInProgressError("A page load is already in progress")
        try:
            if start_id is None:
                if not self.has_more:
                    logger.info("No more games to load")
                    return PageResult(results=self.results, next_game_id=0)
                logger.info(f"Loading more games from id {self.next_game_id}")
                page = self.paginator.fetch_more(self.results.copy(), self.next_game_id)
            else:
                logger.info(f"Loading games from id {start_id}")
                page = self.paginator.fetch_more(ResultsByState(), start_id)

            self.results = page.results
            self.next_game_id = page.next_game_id
            self.last_page = page
            return page
        finally:
            self._lock.release()

    def load_initial(self, total_games: int) -> PageResult:
        """
        Replace the listing with games fetched from the newest one down.

        Args:
            total_games: Highest game id of the authority (from GameStats)
        """
        return self._load(total_games)

    def load_more(self) -> PageResult:
        """
        Continue from the current frontier, keeping the displayed games.

        On failure the displayed games and the frontier are unchanged, so the
        same call can simply be retried.
        """
        return self._load()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "next_game_id": self.next_game_id,
            "games": {
                state.value: [
                    {**game_payload(game), "url": game_url(game)} for game in games
                ]
                for state, games in self.results
            },
        }
