"""
Example usage of the Cubist Games listing client.

See README.md for complete documentation and usage examples.
"""
import os
import sys
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from cubistgames import GameClient, GameListing, GamePaginator, LifecycleState
from cubistgames.errors import TransportError
from cubistgames.listing import game_url


def example_first_page():
    """Example: Load the newest games and print them by state"""
    print("Example 1: First page of games")
    print("=" * 60)

    authority = os.getenv("CUBIST_AUTHORITY")
    if not authority:
        print("CUBIST_AUTHORITY is not set. Check your .env file.")
        return

    with GameClient() as game_client:
        stats = game_client.get_stats(authority)
        print(f"Total games: {stats.total_games}")

        listing = GameListing(GamePaginator(game_client, authority, batch_size=10))
        page = listing.load_initial(stats.total_games)
        print(f"Fetched {page.records} games in {page.batches} batch(es)")

        for state, games in listing.results:
            print(f"\n{state.value} Games:")
            for game in games:
                print(f"  - {game.title}: {game_url(game)}")

        if listing.has_more:
            print(f"\nMore games from id {listing.next_game_id}")


def example_load_more():
    """Example: Keep loading until the settled games are complete"""
    print("\nExample 2: Load more")
    print("=" * 60)

    authority = os.getenv("CUBIST_AUTHORITY")
    if not authority:
        print("CUBIST_AUTHORITY is not set. Check your .env file.")
        return

    with GameClient() as game_client:
        stats = game_client.get_stats(authority)
        listing = GameListing(GamePaginator(game_client, authority, batch_size=10))
        listing.load_initial(stats.total_games)

        failures = 0
        while listing.has_more and failures < 3:
            try:
                listing.load_more()
            except TransportError as e:
                # The listing is unchanged; the same page can be retried
                failures += 1
                print(f"Load failed, retrying from {listing.next_game_id}: {e}")
                continue
            settled = listing.results[LifecycleState.SETTLED]
            print(f"Settled so far: {len(settled)} (next id: {listing.next_game_id})")


if __name__ == "__main__":
    example_first_page()
    example_load_more()
