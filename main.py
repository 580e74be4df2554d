"""
Main entry point for listing Cubist Games from a source checkout.

Usage:
    python main.py --authority <pubkey> --config devnet --load-more 1
"""
import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from cubistgames.cli import main_cli


if __name__ == "__main__":
    sys.exit(main_cli())
