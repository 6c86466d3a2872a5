# chess_extractor/core/rating_tracker.py
"""
Tracks a player's rating over time for one game type.

Games arrive in archive order, which is not guaranteed to be chronological
once several monthly archives are concatenated. The tracker therefore keeps
its samples unordered and sorts them by calendar date whenever a reading is
taken. Malformed dates never raise: they share a single sort key that places
them before every well-formed date, and the stable sort keeps their arrival
order among themselves.
"""
from dataclasses import dataclass
from typing import Final, List, Optional, Tuple, TypeAlias

from chess_extractor.types import UNKNOWN

DateKey: TypeAlias = Tuple[int, int, int]

_MALFORMED_DATE_KEY: Final[DateKey] = (0, 0, 0)


def parse_date(date: Optional[str]) -> Optional[DateKey]:
    """Parses a PGN "YYYY.MM.DD" date into a comparable tuple, or None."""
    if not date:
        return None
    try:
        year, month, day = (int(part) for part in date.split(".")[:3])
    except ValueError:
        return None
    return year, month, day


def date_sort_key(date: Optional[str]) -> DateKey:
    return parse_date(date) or _MALFORMED_DATE_KEY


@dataclass(frozen=True, slots=True)
class RatingSample:
    rating: int; date: str


@dataclass(frozen=True)
class RatingTracker:
    """
    An immutable collection of (rating, date) samples.

    `add_rating` returns a new tracker; samples with a non-positive rating or
    an unknown ("?") date are ignored. Every reading of an empty tracker is 0.

    A sample whose date is present but malformed sorts before every
    well-formed date, so it becomes `starting` (and counts towards `change`)
    whenever it is recorded; ties between malformed dates keep arrival order.
    """
    samples: Tuple[RatingSample, ...] = ()

    def add_rating(self, rating: int, date: Optional[str]) -> "RatingTracker":
        if rating <= 0 or not date or date == UNKNOWN:
            return self
        return RatingTracker(self.samples + (RatingSample(rating, date),))

    def chronological(self) -> List[RatingSample]:
        """Returns the samples sorted by calendar date, oldest first."""
        return sorted(self.samples, key=lambda sample: date_sort_key(sample.date))

    @property
    def starting(self) -> int:
        ordered = self.chronological()
        return ordered[0].rating if ordered else 0

    @property
    def latest(self) -> int:
        ordered = self.chronological()
        return ordered[-1].rating if ordered else 0

    @property
    def change(self) -> int:
        """The chronologically last rating minus the first; 0 with fewer than two samples."""
        if len(self.samples) < 2:
            return 0
        ordered = self.chronological()
        return ordered[-1].rating - ordered[0].rating

    @property
    def average(self) -> int:
        if not self.samples:
            return 0
        return int(sum(sample.rating for sample in self.samples) / len(self.samples))

    @property
    def highest(self) -> int:
        return max((sample.rating for sample in self.samples), default=0)

    @property
    def lowest(self) -> int:
        return min((sample.rating for sample in self.samples), default=0)
