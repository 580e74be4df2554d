"""
CLI for listing Cubist Games by lifecycle state.

Usage:
    # First page of games for the authority in CUBIST_AUTHORITY
    python -m cubistgames.cli --config mainnet

    # Two extra "load more" rounds, as JSON
    python -m cubistgames.cli --authority <pubkey> --load-more 2 --json

    # Everything down to game 1
    cubist-games --config devnet --all
"""
import argparse
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from cubistgames.errors import CubistGamesError, SiteNotConfiguredError
from cubistgames.game_client import GameClient
from cubistgames.listing import GameListing
from cubistgames.pagination import GamePaginator
from cubistgames.utils.cli import configure_args, configure_logging, log_page, print_listing, validate_args
from cubistgames.utils.config_utils import resolve_client_config


load_dotenv()
logger = logging.getLogger(__name__)


def run_listing(game_client: GameClient, authority: str, batch_size: int,
                load_more: int = 0, load_all: bool = False) -> GameListing:
    """
    Load the first page of games and then any extra pages requested.

    Args:
        game_client: Client for the games API
        authority: Public key that owns the games
        batch_size: Number of games requested per batch
        load_more: Number of "load more" rounds after the first page
        load_all: Keep loading until no games are left

    Returns:
        The populated GameListing
    """
    stats = game_client.get_stats(authority)
    logger.info(f"Authority {authority} has {stats.total_games} games")

    listing = GameListing(GamePaginator(game_client, authority, batch_size=batch_size))
    log_page(listing.load_initial(stats.total_games))

    rounds = 0
    while listing.has_more and (load_all or rounds < load_more):
        log_page(listing.load_more())
        rounds += 1

    return listing


def main_cli(cli_args: Optional[list] = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="List Cubist Games grouped into open, closed and settled"
    )
    configure_args(parser)

    args = parser.parse_args(cli_args)
    validate_args(args, parser)
    configure_logging(args)

    try:
        config = resolve_client_config(
            config=args.config,
            api_url=args.api_url,
            authority=args.authority,
            batch_size=args.batch_size,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        with GameClient(api_url=config.api_url, timeout=config.timeout,
                        retries=config.retries) as game_client:
            listing = run_listing(
                game_client,
                config.authority,
                config.batch_size,
                load_more=args.load_more,
                load_all=args.all,
            )
    except SiteNotConfiguredError as e:
        logger.warning(f"{e} (authority: {e.authority})")
        return 1
    except CubistGamesError as e:
        logger.error(f"✗ Failed to list games: {e}")
        return 1

    print_listing(listing, as_json=args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main_cli())
