# chess_extractor/core/time_control.py
"""
Provides pure, stateless helpers for PGN `TimeControl` tags.

A tag is either base seconds only ("600") or base plus increment seconds
("180+2"). These helpers render a tag in the "minutes|increment" display form,
bucket it into a coarse game type, and decide whether it satisfies a
user-supplied filter. Malformed tags degrade to "?|?" and `GameType.UNKNOWN`;
nothing in this module raises on bad input.
"""

from typing import Final, List, Optional, Tuple

from chess_extractor.types import GameType, TimeControl, UNKNOWN

UNKNOWN_DISPLAY: Final[str] = "?|?"

# The filter value that accepts every game.
MATCH_ALL_FILTER: Final[str] = "0"

# Inclusive upper bounds in whole minutes, checked in order.
_CATEGORY_THRESHOLDS: Final[List[Tuple[int, GameType]]] = [
    (1, GameType.BULLET),
    (3, GameType.BLITZ),
    (10, GameType.RAPID),
    (30, GameType.CLASSICAL),
]


def _is_missing(time_control_raw: Optional[str]) -> bool:
    return time_control_raw is None or time_control_raw.strip() in ("", UNKNOWN, "-")


def _base_seconds(time_control_raw: str) -> Optional[int]:
    try:
        return int(time_control_raw.split("+")[0])
    except ValueError:
        return None


def format_time_control(time_control_raw: Optional[str]) -> str:
    """
    Converts a TimeControl tag to "<base minutes>|<increment seconds>".

    Examples: "600" -> "10|0", "180+2" -> "3|2", "?" -> "?|?".
    """
    if _is_missing(time_control_raw):
        return UNKNOWN_DISPLAY

    try:
        if "+" not in time_control_raw:
            return f"{int(time_control_raw) // 60}|0"
        base_str, increment_str = time_control_raw.split("+")[:2]
        return f"{int(base_str) // 60}|{int(increment_str)}"
    except ValueError:
        return UNKNOWN_DISPLAY


def determine_game_type(time_control_raw: Optional[str], event: Optional[str] = None) -> GameType:
    """
    Buckets a game by its base time.

    The tag must carry a numeric base time; anything else (including the
    "moves/seconds" form) is `UNKNOWN`. A game whose Event tag mentions "Daily"
    is then `DAILY` whatever its base time. Otherwise the base time in whole
    minutes selects Bullet (<= 1), Blitz (<= 3), Rapid (<= 10), Classical (<= 30)
    or Correspondence.

    Args:
        time_control_raw: The raw "TimeControl" tag value.
        event: The raw "Event" tag value, possibly "?".

    Returns:
        The `GameType`, or `GameType.UNKNOWN` when the tag is missing or malformed.
    """
    if _is_missing(time_control_raw):
        return GameType.UNKNOWN

    base_seconds = _base_seconds(time_control_raw)
    if base_seconds is None:
        return GameType.UNKNOWN
    if event and "Daily" in event:
        return GameType.DAILY

    minutes = base_seconds // 60
    for upper_bound, game_type in _CATEGORY_THRESHOLDS:
        if minutes <= upper_bound:
            return game_type
    return GameType.CORRESPONDENCE


def normalize_time_control(time_control_raw: Optional[str], event: Optional[str] = None) -> TimeControl:
    """Bundles the raw tag with its display form and game type."""
    raw = time_control_raw if time_control_raw is not None else UNKNOWN
    return TimeControl(
        raw=raw,
        display=format_time_control(raw),
        game_type=determine_game_type(raw, event),
    )


def matches_time_control_filter(time_control_raw: Optional[str], time_control_filter: str) -> bool:
    """
    Decides whether a game's raw TimeControl tag satisfies a user filter.

    The filter "0" accepts everything. Otherwise the tag must equal the filter
    exactly, or, when the filter carries no increment, start with it. So "600"
    accepts "600" and "600+5", while "180+2" accepts only "180+2". A missing
    tag ("?" or "-") never matches a real filter.
    """
    normalized_filter = time_control_filter.strip()
    if normalized_filter == MATCH_ALL_FILTER:
        return True
    if _is_missing(time_control_raw):
        return False

    normalized_game = time_control_raw.strip()
    if normalized_game == normalized_filter:
        return True
    return "+" not in normalized_filter and normalized_game.startswith(normalized_filter)
