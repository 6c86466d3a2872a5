"""
The main entry point for launching the Chess Move Extractor from a checkout.
"""
import sys

from chess_extractor.cli import main

if __name__ == "__main__":
    sys.exit(main())
