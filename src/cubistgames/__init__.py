"""Cubist Games listing client"""

from .schemas import (
    # Game records
    GameRecord,
    GameData,
    GameCache,
    GameDefinition,
    GameStats,
    LifecycleState,
    ResultsByState,
    # Configuration
    ClientConfig,
)
from .errors import (
    CubistGamesError,
    TransportError,
    ClassificationAmbiguous,
    SiteNotConfiguredError,
    PaginationInProgressError,
)
from .game_client import GameClient
from .game_state import game_state, bucket_for
from .pagination import GamePaginator, PageResult, game_batch
from .listing import GameListing, game_url

__version__ = "0.1.0"

__all__ = [
    # Components
    "GameClient",
    "GamePaginator",
    "GameListing",
    "PageResult",
    "game_batch",
    "game_state",
    "bucket_for",
    "game_url",
    # Schemas
    "GameRecord",
    "GameData",
    "GameCache",
    "GameDefinition",
    "GameStats",
    "LifecycleState",
    "ResultsByState",
    "ClientConfig",
    # Errors
    "CubistGamesError",
    "TransportError",
    "ClassificationAmbiguous",
    "SiteNotConfiguredError",
    "PaginationInProgressError",
]
