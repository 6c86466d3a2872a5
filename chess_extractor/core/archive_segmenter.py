# chess_extractor/core/archive_segmenter.py
"""
Splits a multi-game PGN archive into one text block per game.
"""

import re
from typing import List, Optional

# A blank line followed by a line that opens a new header block. The lookahead
# leaves the "[" in place so it starts the next segment.
_BLOCK_BOUNDARY = re.compile(r"\n\s*\n(?=\[)")


def split_archive(archive_text: Optional[str]) -> List[str]:
    """
    Splits `archive_text` into trimmed, non-empty game blocks in archive order.

    An empty or malformed archive yields an empty list; this never raises.
    """
    if not archive_text:
        return []
    blocks = (block.strip() for block in _BLOCK_BOUNDARY.split(archive_text))
    return [block for block in blocks if block]
