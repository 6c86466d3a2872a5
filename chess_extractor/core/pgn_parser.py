# chess_extractor/core/pgn_parser.py
"""
Parses a single PGN game block into the application's `ParsedGame` contract.

Parsing is deliberately tolerant: the block is split into header and move
sections by line prefix, tags are pulled out with a literal pattern, and every
missing or malformed field falls back to a documented sentinel ("?", 0,
`PlayerColor.UNKNOWN`, `ResultLabel.UNKNOWN`). The only block rejected outright
is one with no header line at all.
"""
from typing import List, Optional, Tuple

import structlog

from chess_extractor.core.move_text import calculate_move_count, clean_moves
from chess_extractor.core.tag_extractor import extract_tag
from chess_extractor.core.time_control import normalize_time_control
from chess_extractor.types import PlayerColor, ParsedGame, ResultLabel, UNKNOWN

logger = structlog.get_logger(__name__)

_WHITE_WINS = "1-0"
_BLACK_WINS = "0-1"
_DRAWN = "1/2-1/2"


def _normalize_name(name: str) -> str:
    return name.strip().replace('"', "")


def split_game_block(game_block: str) -> Tuple[str, str]:
    """
    Separates a game block into its header section and its move text.

    Header lines are the leading lines that start with "[". Once any other line
    (including a blank one) has been seen, every later line is move text, even
    if it starts with "[". Move lines are joined with single spaces.

    Returns:
        A `(headers, move_text)` tuple; headers keep one tag per line.
    """
    header_lines: List[str] = []
    move_lines: List[str] = []
    in_move_section = False

    for raw_line in game_block.split("\n"):
        line = raw_line.strip()
        if not in_move_section and line.startswith("["):
            header_lines.append(line)
            continue
        in_move_section = True
        if line:
            move_lines.append(line)

    return "\n".join(header_lines), " ".join(move_lines)


def determine_user_color(username: str, white: str, black: str) -> PlayerColor:
    """Returns which side `username` played, compared case-insensitively."""
    target = _normalize_name(username).lower()
    if target == _normalize_name(white).lower():
        return PlayerColor.WHITE
    if target == _normalize_name(black).lower():
        return PlayerColor.BLACK
    return PlayerColor.UNKNOWN


def determine_user_result(username: str, white: str, black: str, pgn_result: str) -> ResultLabel:
    """
    Translates a PGN Result tag into a result relative to `username`.

    Args:
        username: The player whose perspective is wanted.
        white: The raw "White" tag value.
        black: The raw "Black" tag value.
        pgn_result: The raw "Result" tag value ("1-0", "0-1", "1/2-1/2", ...).

    Returns:
        WON, LOST or DRAW; UNKNOWN when the user played neither side or the
        result token is not recognised.
    """
    color = determine_user_color(username, white, black)
    if color is PlayerColor.UNKNOWN:
        return ResultLabel.UNKNOWN

    if pgn_result == _DRAWN:
        return ResultLabel.DRAW
    if pgn_result == _WHITE_WINS:
        return ResultLabel.WON if color is PlayerColor.WHITE else ResultLabel.LOST
    if pgn_result == _BLACK_WINS:
        return ResultLabel.WON if color is PlayerColor.BLACK else ResultLabel.LOST
    return ResultLabel.UNKNOWN


def determine_user_rating(color: PlayerColor, white_elo: str, black_elo: str) -> int:
    """Returns the user's Elo for the game, or 0 when unknown or non-numeric."""
    if color is PlayerColor.WHITE:
        elo = white_elo
    elif color is PlayerColor.BLACK:
        elo = black_elo
    else:
        return 0

    try:
        return int(elo)
    except ValueError:
        return 0


def parse_game_block(game_block: str, username: str) -> Optional[ParsedGame]:
    """
    Parses one game block from the perspective of `username`.

    Args:
        game_block: A single game's header lines followed by its move text.
        username: The target player, matched case-insensitively.

    Returns:
        A `ParsedGame`, or None if the block contains no header line at all.
    """
    headers, move_text = split_game_block(game_block)
    if not headers:
        logger.debug("Skipping block without PGN headers.", preview=game_block[:40])
        return None

    white = extract_tag(headers, "White")
    black = extract_tag(headers, "Black")
    result = extract_tag(headers, "Result")
    event = extract_tag(headers, "Event")
    white_elo = extract_tag(headers, "WhiteElo")
    black_elo = extract_tag(headers, "BlackElo")

    date = extract_tag(headers, "UTCDate")
    if date == UNKNOWN:
        date = extract_tag(headers, "Date")

    color = determine_user_color(username, white, black)
    time_control = normalize_time_control(extract_tag(headers, "TimeControl"), event)
    moves = clean_moves(move_text)

    return ParsedGame(
        moves=moves,
        result_label=determine_user_result(username, white, black, result),
        time_control_display=time_control.display,
        game_type=time_control.game_type,
        time_control_raw=time_control.raw,
        white_player=white,
        black_player=black,
        white_elo=white_elo,
        black_elo=black_elo,
        date=date,
        result=result,
        event=event,
        color=color,
        user_rating=determine_user_rating(color, white_elo, black_elo),
        move_count=calculate_move_count(moves),
    )
