# chess_extractor/types.py
"""
A central module for shared data structures and service interfaces (Protocols).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, List, Optional, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from chess_extractor.core.stats_aggregator import AggregateStatistics

# Sentinel used for every tag or field whose source value is absent.
UNKNOWN: Final[str] = "?"

class GameType(str, Enum):
    BULLET = "Bullet"; BLITZ = "Blitz"; RAPID = "Rapid"; CLASSICAL = "Classical"
    CORRESPONDENCE = "Correspondence"; DAILY = "Daily"; UNKNOWN = "Unknown"

class ResultLabel(str, Enum):
    WON = "(won)"; LOST = "(lost)"; DRAW = "(draw)"; UNKNOWN = "(?)"

class PlayerColor(str, Enum):
    WHITE = "White"; BLACK = "Black"; UNKNOWN = "Unknown"


# --- DATA CONTRACTS ---

@dataclass(frozen=True, slots=True)
class TimeControl:
    raw: str; display: str; game_type: GameType

@dataclass(frozen=True)
class ParsedGame:
    """One game block, reduced to the fields the statistics need."""
    moves: str; result_label: ResultLabel; time_control_display: str
    game_type: GameType; time_control_raw: str
    white_player: str; black_player: str; white_elo: str; black_elo: str
    date: str
    result: str = UNKNOWN; event: str = UNKNOWN
    color: PlayerColor = PlayerColor.UNKNOWN
    user_rating: int = 0
    move_count: int = 0

@dataclass(frozen=True, slots=True)
class AcceptedGame:
    """A parsed game that passed the time-control filter, numbered from 1."""
    index: int; game: ParsedGame

@dataclass
class RunReport:
    blocks_read: int; games_accepted: int
    statistics: "AggregateStatistics"
    report_path: Optional["Path"] = None
    warnings: List[str] = field(default_factory=list)


# --- PROTOCOLS: Abstract Interfaces for Services ---

@runtime_checkable
class ArchiveSource(Protocol):
    """Supplies one concatenated PGN blob for a user's requested period."""
    def fetch_archive(self, username: str, year: str, month: str) -> str: ...
