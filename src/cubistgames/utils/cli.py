import json
import logging

from cubistgames.listing import GameListing, game_url
from cubistgames.pagination import PageResult

logger = logging.getLogger(__name__)

# ============================================================================
# CLI Arguments
# ============================================================================

def configure_args(parser):
    # Connection
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Profile name from profiles.yml (default: mainnet)"
    )
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Base URL of the games API (overrides CUBIST_API_URL and the profile)"
    )
    parser.add_argument(
        "--authority",
        type=str,
        default=None,
        help="Public key that owns the games (overrides CUBIST_AUTHORITY)"
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Number of games requested per batch (default: from profile, 10)"
    )

    # Paging
    paging_group = parser.add_mutually_exclusive_group()
    paging_group.add_argument(
        "--load-more",
        type=int,
        default=0,
        metavar="N",
        help="Load N more pages after the initial load (default: 0)"
    )
    paging_group.add_argument(
        "--all",
        action="store_true",
        help="Keep loading pages until every game has been fetched"
    )

    # Display
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the listing as JSON instead of text"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level for app, WARNING for libraries)"
    )

# ============================================================================
# CLI Configurers
# ============================================================================

def validate_args(args, parser):
    if args.batch_size is not None and args.batch_size <= 0:
        parser.error("--batch-size must be greater than 0")
    if args.load_more < 0:
        parser.error("--load-more must not be negative")

def configure_logging(args):
    if args.verbose:
        # Verbose mode: Show DEBUG for our code, WARNING+ for libraries
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        library_loggers = ['urllib3', 'requests']
        for lib_logger in library_loggers:
            logging.getLogger(lib_logger).setLevel(logging.WARNING)

        logging.getLogger('cubistgames').setLevel(logging.DEBUG)
        logging.getLogger('__main__').setLevel(logging.DEBUG)

        logger.info("Verbose mode enabled")
    else:
        logging.basicConfig(
            level=getattr(logging, args.log_level.upper()),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

# ============================================================================
# CLI Handlers
# ============================================================================

def format_listing(listing: GameListing) -> str:
    lines = []
    for state, games in listing.results:
        lines.append(f"{state.value} Games")
        lines.append("=" * 60)
        if not games:
            lines.append("  (none)")
        for game in games:
            title = game.title or f"Game #{game.game_id}"
            lines.append(f"  {game.game_id:>6}  {title:<40} {game_url(game)}")
        lines.append("")
    if listing.has_more:
        lines.append(f"More games available (next id: {listing.next_game_id})")
    return "\n".join(lines)

def print_listing(listing: GameListing, as_json: bool = False):
    if as_json:
        print(json.dumps(listing.as_dict(), indent=2))
    else:
        print(format_listing(listing))

def log_page(page: PageResult):
    logger.info(
        f"Page loaded: {page.records} games in {page.batches} batch(es), "
        f"next id {page.next_game_id} ({page.stop_reason})"
    )
