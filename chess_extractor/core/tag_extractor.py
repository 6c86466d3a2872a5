# chess_extractor/core/tag_extractor.py
"""
Pulls single tag values out of a PGN header section.

Headers are matched with a literal `[Key "Value"]` pattern rather than a full
PGN grammar, so a header section that is otherwise malformed still yields
whatever tags can be recognised.
"""

import functools
import re
from typing import Pattern

from chess_extractor.types import UNKNOWN


@functools.lru_cache(maxsize=64)
def _tag_pattern(key: str) -> Pattern[str]:
    # The space after the key keeps "White" from matching "[WhiteElo ...]".
    return re.compile(r"\[" + re.escape(key) + r" \"([^\"]+)\"\]")


def extract_tag(headers: str, key: str) -> str:
    """
    Returns the value of the first `[key "value"]` tag in `headers`.

    Args:
        headers: The header lines of a single game block.
        key: The exact, case-sensitive tag name (e.g. "WhiteElo").

    Returns:
        The quoted value, or "?" when the tag is absent or its value is empty.
    """
    match = _tag_pattern(key).search(headers)
    return match.group(1) if match else UNKNOWN
