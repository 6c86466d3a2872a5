"""
Command-line interface for the Chess Move Extractor.

Usage: chess-move-extractor USERNAME YEAR MONTH FILTER
Any missing positional argument is asked for interactively.
"""
import argparse
import sys
from typing import List, Optional

import structlog

from chess_extractor.config.settings import settings
from chess_extractor.containers import get_container
from chess_extractor.exceptions import ArchiveRetrievalError, ConfigurationError, ReportGenerationError
from chess_extractor.orchestration.orchestrator import ExtractionOrchestrator
from chess_extractor.orchestration.run_config_factory import RunConfigFactory
from chess_extractor.output.report_generator import ReportGenerator
from chess_extractor.services.archive_client import ChessComArchiveClient
from chess_extractor.utils.logging_config import setup_logging

logger = structlog.get_logger(__name__)

FAILURE_HINTS = (
    "1. The username might be incorrect",
    "2. There are no games for the specified year/month",
    "3. The year might be in the future",
    "4. Network connection issue",
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="chess-move-extractor",
        description="Download a Chess.com player's games and write a move and statistics report.",
    )
    parser.add_argument("username", nargs="?", help="Chess.com username.")
    parser.add_argument("year", nargs="?", help="Four-digit year.")
    parser.add_argument("month", nargs="?", help="Month 1-12, or 0 for the entire year.")
    parser.add_argument(
        "time_control_filter", nargs="?", metavar="filter",
        help="Time control to keep, e.g. 600 or 180+2; 0 keeps every game.",
    )
    parser.add_argument("--output-dir", default=None, help="Directory for the report file.")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings).")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Runs one extraction and returns the process exit status."""
    args = parse_args(argv)
    setup_logging(log_level=args.log_level or settings.default_log_level, log_file=settings.log_file)

    try:
        run_config = RunConfigFactory.create_from_cli(
            args, output_dir=args.output_dir or settings.report.output_dir
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    container = get_container(run_config, settings)
    orchestrator = container.resolve(ExtractionOrchestrator)
    print(f"Fetching games for {run_config.username} ({run_config.period_label})...")

    try:
        report = orchestrator.run()
    except ArchiveRetrievalError as e:
        logger.error("Archive retrieval failed.", url=e.url, status_code=e.status_code)
        print(f"Error: {e}", file=sys.stderr)
        print("\nPossible reasons:")
        for hint in FAILURE_HINTS:
            print(hint)
        return 1
    except ReportGenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        container.resolve(ChessComArchiveClient).close()

    for warning in report.warnings:
        print(warning)
    if report.games_accepted == 0:
        return 0

    print(f"\nSuccess! Games saved to: {report.report_path}")
    print("\n" + ReportGenerator.format_console_summary(report.statistics))
    return 0
