# chess_extractor/core/stats_aggregator.py
"""
Provides a pure function to fold parsed games into aggregate statistics.

This module encapsulates the business logic for the run-wide statistics. It
takes the previous aggregate and one newly accepted `ParsedGame`, and returns
the updated aggregate without touching its input, so a run is simply
`reduce(add_game, games, AggregateStatistics())`.

Every game counts towards the overall and per-colour totals. Only games with a
valid (positive) user rating reach the per-game-type breakdown and the rating
trackers.
"""

import dataclasses
import functools
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from chess_extractor.core.rating_tracker import DateKey, RatingTracker, parse_date
from chess_extractor.types import GameType, ParsedGame, PlayerColor, ResultLabel, UNKNOWN


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0


@dataclass(frozen=True, slots=True)
class ResultCounts:
    """Won/lost/draw tallies; an unresolved `(?)` result only counts towards `total`."""
    total: int = 0; won: int = 0; lost: int = 0; draw: int = 0

    def record(self, result_label: ResultLabel) -> "ResultCounts":
        return ResultCounts(
            total=self.total + 1,
            won=self.won + (result_label is ResultLabel.WON),
            lost=self.lost + (result_label is ResultLabel.LOST),
            draw=self.draw + (result_label is ResultLabel.DRAW),
        )

    @property
    def win_rate(self) -> float:
        return _percent(self.won, self.total)

    @property
    def loss_rate(self) -> float:
        return _percent(self.lost, self.total)

    @property
    def draw_rate(self) -> float:
        return _percent(self.draw, self.total)


@dataclass(frozen=True)
class GameTypeStats:
    """Results, move totals and ratings for every rated game of one type."""
    game_type: GameType
    results: ResultCounts = ResultCounts()
    total_moves: int = 0
    ratings: Tuple[int, ...] = ()
    dates: Tuple[str, ...] = ()
    max_rating: int = 0
    latest_rating: int = 0
    _min_rating: Optional[int] = field(default=None, repr=False)
    _latest_date: Optional[DateKey] = field(default=None, repr=False)

    def add_game(self, result_label: ResultLabel, move_count: int, rating: int, date: str) -> "GameTypeStats":
        if rating <= 0:
            return self

        latest_rating, latest_date = self.latest_rating, self._latest_date
        date_key = parse_date(date)
        if date_key is not None:
            if latest_date is None or date_key >= latest_date:
                latest_rating, latest_date = rating, date_key
        elif latest_rating == 0:
            latest_rating = rating

        return dataclasses.replace(
            self,
            results=self.results.record(result_label),
            total_moves=self.total_moves + move_count,
            ratings=self.ratings + (rating,),
            dates=self.dates + ((date,) if date and date != UNKNOWN else ()),
            max_rating=max(self.max_rating, rating),
            latest_rating=latest_rating,
            _min_rating=rating if self._min_rating is None else min(self._min_rating, rating),
            _latest_date=latest_date,
        )

    @property
    def total(self) -> int:
        return self.results.total

    @property
    def min_rating(self) -> int:
        return self._min_rating or 0

    @property
    def rating_range(self) -> int:
        if self._min_rating is None:
            return 0
        return self.max_rating - self._min_rating

    @property
    def average_rating(self) -> int:
        if not self.ratings:
            return 0
        return int(sum(self.ratings) / len(self.ratings))

    @property
    def average_moves(self) -> float:
        return self.total_moves / self.total if self.total > 0 else 0.0


@dataclass(frozen=True)
class AggregateStatistics:
    """
    The run-wide statistics, rebuilt (never mutated) for every accepted game.

    `game_types` and `rating_trackers` keep their keys in first-seen order.
    """
    overall: ResultCounts = ResultCounts()
    white: ResultCounts = ResultCounts()
    black: ResultCounts = ResultCounts()
    total_moves: int = 0
    move_counts: Tuple[int, ...] = ()
    game_types: Dict[GameType, GameTypeStats] = field(default_factory=dict)
    rating_trackers: Dict[GameType, RatingTracker] = field(default_factory=dict)

    @property
    def total_games(self) -> int:
        return self.overall.total

    @property
    def average_moves(self) -> float:
        return self.total_moves / self.total_games if self.total_games > 0 else 0.0

    @property
    def shortest_game(self) -> int:
        return min(self.move_counts, default=0)

    @property
    def longest_game(self) -> int:
        return max(self.move_counts, default=0)

    @property
    def median_game_length(self) -> int:
        """The upper median: element n // 2 of the sorted move counts."""
        if not self.move_counts:
            return 0
        ordered = sorted(self.move_counts)
        return ordered[len(ordered) // 2]

    def game_type_distribution(self) -> Dict[GameType, float]:
        """Share of all games, in percent, held by each rated game type."""
        return {
            game_type: _percent(type_stats.total, self.total_games)
            for game_type, type_stats in self.game_types.items()
        }


def add_game(stats: AggregateStatistics, game: ParsedGame) -> AggregateStatistics:
    """
    Returns a new aggregate that includes `game`.

    Colour bucketing only special-cases White: a game whose colour is Black or
    Unknown lands in the Black counters.

    Args:
        stats: The aggregate so far.
        game: A parsed game that passed the run's filter.

    Returns:
        The updated `AggregateStatistics`; `stats` itself is left untouched.
    """
    label = game.result_label
    updates = {
        "overall": stats.overall.record(label),
        "total_moves": stats.total_moves + game.move_count,
        "move_counts": stats.move_counts + (game.move_count,),
    }
    if game.color is PlayerColor.WHITE:
        updates["white"] = stats.white.record(label)
    else:
        updates["black"] = stats.black.record(label)

    if game.user_rating > 0:
        type_stats = stats.game_types.get(game.game_type) or GameTypeStats(game.game_type)
        tracker = stats.rating_trackers.get(game.game_type) or RatingTracker()
        updates["game_types"] = {
            **stats.game_types,
            game.game_type: type_stats.add_game(label, game.move_count, game.user_rating, game.date),
        }
        updates["rating_trackers"] = {
            **stats.rating_trackers,
            game.game_type: tracker.add_rating(game.user_rating, game.date),
        }

    return dataclasses.replace(stats, **updates)


def aggregate_games(
    games: Iterable[ParsedGame], stats: Optional[AggregateStatistics] = None
) -> AggregateStatistics:
    """Folds `games`, in order, into `stats` (or into an empty aggregate)."""
    return functools.reduce(add_game, games, stats or AggregateStatistics())
