"""
Cubist Games read client for API communication.

Talks to the HTTP indexer that serves game accounts of an authority.
"""
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import requests
from pydantic import ValidationError
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import SiteNotConfiguredError, TransportError
from .schemas import GameRecord, GamesPage, GameStats


logger = logging.getLogger(__name__)


class GameClient:
    """Client for reading games from the Cubist Games API"""

    DEFAULT_TIMEOUT = 10

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = 3,
    ):
        """
        Initialize the game client.

        Args:
            api_url: Base URL of the games API. If not provided, reads from CUBIST_API_URL env var.
            api_key: Optional API key. If not provided, reads from CUBIST_API_KEY env var.
            timeout: Per-request timeout in seconds
            retries: Transport-level retries for connection errors and 429/5xx responses
        """
        self.api_url = (api_url or os.getenv("CUBIST_API_URL") or "").rstrip("/")
        if not self.api_url:
            raise ValueError("CUBIST_API_URL not found in environment or parameters")

        self.api_key = api_key or os.getenv("CUBIST_API_KEY")
        self.timeout = timeout

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json"
        }
        if self.api_key:
            self.headers["X-API-Key"] = self.api_key

        self._session = Session()
        self._session.headers.update(self.headers)

        retry = Retry(
            total=retries,
            backoff_factor=0.5,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset({"GET", "POST"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.api_url}{endpoint}"
        try:
            return self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request to {endpoint} failed: {e}")
            raise TransportError.from_http_error(e, endpoint=endpoint) from e

    @staticmethod
    def _json(response: requests.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "Games API returned a non-JSON response",
                status_code=response.status_code,
                response_body=response.text,
                endpoint=endpoint,
                cause=e,
            ) from e

    def get_stats(self, authority: str) -> GameStats:
        """
        Get game counters for an authority.

        Args:
            authority: Public key that owns the games

        Returns:
            GameStats whose total_games is the highest game id created

        Raises:
            SiteNotConfiguredError: If the authority has no stats account yet
            TransportError: On any other API failure
        """
        endpoint = f"/api/stats/{authority}"
        response = self._request("GET", endpoint)

        if response.status_code == 404:
            raise SiteNotConfiguredError("The site is not configured yet", authority=authority)
        if response.status_code != 200:
            logger.error(f"Failed to get stats: {response.text}")
            raise TransportError(
                "Failed to get stats",
                status_code=response.status_code,
                response_body=response.text,
                endpoint=endpoint,
            )

        payload = self._json(response, endpoint)
        try:
            return GameStats.model_validate(payload)
        except ValidationError as e:
            raise TransportError("Malformed stats payload", endpoint=endpoint, cause=e) from e

    def fetch_games(self, game_ids: Sequence[int], authority: str) -> List[GameRecord]:
        """
        Fetch a batch of games by id.

        Ids that have no game account are left out of the response; that is
        not an error. The order of the returned games is not guaranteed.

        Args:
            game_ids: Ids of the games to fetch
            authority: Public key that owns the games

        Returns:
            List of GameRecord for the ids that exist

        Example response:
            {"games": [
                {"data": {"gameId": 25, "openTime": 1700000000, "closeTime": 1700086400,
                          "settled": false, "voided": false},
                 "cached": {"definition": {"title": "Who wins the final?"}}}
            ]}
        """
        if not game_ids:
            return []

        endpoint = "/api/games/batch"
        data = {
            "authority": authority,
            "gameIds": list(game_ids)
        }

        response = self._request("POST", endpoint, json=data)

        if response.status_code != 200:
            logger.error(f"Failed to fetch games {list(game_ids)}: {response.text}")
            raise TransportError(
                "Failed to fetch games",
                status_code=response.status_code,
                response_body=response.text,
                endpoint=endpoint,
            )

        payload = self._json(response, endpoint)
        try:
            games = GamesPage.model_validate(payload).games
        except ValidationError as e:
            raise TransportError("Malformed games payload", endpoint=endpoint, cause=e) from e

        logger.debug(f"Fetched {len(games)} of {len(game_ids)} requested games")
        return games

    def close(self):
        """Close the session"""
        if hasattr(self, '_session'):
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def game_payload(game: GameRecord) -> Dict[str, Any]:
    """Serialize a game record back to its wire form"""
    return game.model_dump(mode="json", by_alias=True, exclude_none=True)
