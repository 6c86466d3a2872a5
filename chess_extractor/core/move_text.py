# chess_extractor/core/move_text.py
"""
Cleans PGN move text and counts the moves in it.

Chess.com archives annotate every ply with a clock comment, e.g.
`1. e4 {[%clk 0:09:58.7]} 1... e5 {[%clk 0:09:57.2]}`, and some exports add
engine evaluations as well. These helpers strip those annotations so the
report shows bare SAN, and count full moves without simulating a board.
"""

import re
from typing import Final

# A brace comment carrying a clock or evaluation command, whatever else it holds.
ANNOTATION_PATTERN: Final = re.compile(r"\{[^}]*\[%(?:clk|eval)\b[^}]*\}")

# One or more result tokens at the very end of the move text.
TRAILING_RESULT_PATTERN: Final = re.compile(r"(?:(?:^|\s+)(?:1-0|0-1|1/2-1/2))+\s*$")

_MOVE_NUMBER_PATTERN: Final = re.compile(r"\d+\.(?:\.\.)?")
_RESULT_TOKEN_PATTERN: Final = re.compile(r"1-0|0-1|1/2-1/2")


def clean_moves(move_text: str) -> str:
    """
    Removes clock/eval comments and the trailing result, collapsing whitespace.

    The function is idempotent: cleaning an already clean string returns it
    unchanged.
    """
    cleaned = ANNOTATION_PATTERN.sub("", move_text)
    cleaned = TRAILING_RESULT_PATTERN.sub("", cleaned)
    return " ".join(cleaned.split())


def calculate_move_count(moves: str) -> int:
    """
    Counts full moves (a white ply plus a black ply) in cleaned move text.

    Move numbers ("12."), continuation markers ("12...") and result tokens are
    ignored; every other token is one ply. A trailing unanswered white ply does
    not count as a full move.
    """
    plies = sum(
        1 for token in moves.split()
        if not _MOVE_NUMBER_PATTERN.fullmatch(token)
        and not _RESULT_TOKEN_PATTERN.fullmatch(token)
    )
    return plies // 2
