"""
Manages run-level processing counters for the Chess Move Extractor.

This module provides the StatisticsTracker class, which counts what happened
to the game blocks of one run (read, accepted, skipped and why). It is
separate from the game statistics in the report: these counters describe the
run, not the player.
"""
from collections import Counter
from enum import Enum, auto
from typing import Dict

import structlog

logger = structlog.get_logger(__name__)


class StatKey(Enum):
    """Enumeration for keys used in the StatisticsTracker for type safety."""
    BLOCKS_READ = auto()
    GAMES_ACCEPTED = auto()
    GAMES_SKIPPED_TOTAL = auto()
    SKIPPED_TIME_CONTROL = auto()
    SKIPPED_MALFORMED = auto()


# Human-readable labels, in the order the summary lists them.
STAT_DISPLAY_NAMES: Dict[StatKey, str] = {
    StatKey.BLOCKS_READ: "Game blocks read",
    StatKey.GAMES_ACCEPTED: "Games added to report",
    StatKey.GAMES_SKIPPED_TOTAL: "Blocks skipped",
    StatKey.SKIPPED_TIME_CONTROL: "Skipped by time control filter",
    StatKey.SKIPPED_MALFORMED: "Skipped without PGN headers",
}


class StatisticsTracker:
    """
    Counts processing outcomes for a single run.
    """

    def __init__(self):
        self.stats: Counter[StatKey] = Counter()

    def reset(self) -> None:
        """Resets all counters for a new run."""
        self.stats.clear()

    def add_stat(self, key: StatKey, count: int = 1) -> None:
        """Increments a statistic by a given amount."""
        self.stats[key] += count

    def get(self, key: StatKey) -> int:
        return self.stats.get(key, 0)

    def as_dict(self) -> Dict[str, int]:
        """Returns every counter, zeros included, keyed by lower-case stat name."""
        return {key.name.lower(): self.get(key) for key in StatKey}

    def log_summary(self) -> None:
        """Logs the counters as one structured event plus one readable line per non-zero counter."""
        logger.info("Extraction run summary.", **self.as_dict())
        for key, label in STAT_DISPLAY_NAMES.items():
            if self.stats[key]:
                logger.debug(f"{label:<32}: {self.stats[key]:>6}")
