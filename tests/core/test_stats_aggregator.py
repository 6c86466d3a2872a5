from dataclasses import replace

from chess_extractor.core.pgn_parser import parse_game_block
from chess_extractor.core.archive_segmenter import split_archive
from chess_extractor.core.stats_aggregator import (
    AggregateStatistics,
    GameTypeStats,
    ResultCounts,
    add_game,
    aggregate_games,
)
from chess_extractor.types import GameType, ParsedGame, PlayerColor, ResultLabel


def _game(**overrides) -> ParsedGame:
    base = ParsedGame(
        moves="1. e4 e5", result_label=ResultLabel.WON, time_control_display="5|2",
        game_type=GameType.RAPID, time_control_raw="300+2",
        white_player="Alice", black_player="Bob", white_elo="1500", black_elo="1480",
        date="2024.01.05", color=PlayerColor.WHITE, user_rating=1500, move_count=30,
    )
    return replace(base, **overrides)


def test_add_game_updates_overall_and_color_counters():
    stats = add_game(AggregateStatistics(), _game())

    assert stats.overall == ResultCounts(total=1, won=1)
    assert stats.white == ResultCounts(total=1, won=1)
    assert stats.black == ResultCounts()
    assert stats.total_moves == 30
    assert stats.move_counts == (30,)


def test_add_game_does_not_mutate_input():
    empty = AggregateStatistics()
    add_game(empty, _game())

    assert empty.total_games == 0
    assert empty.game_types == {}
    assert empty.rating_trackers == {}


def test_unrated_game_skips_rating_aggregates():
    stats = add_game(AggregateStatistics(), _game(user_rating=0))

    assert stats.total_games == 1
    assert stats.white.total == 1
    assert stats.game_types == {}
    assert stats.rating_trackers == {}


def test_non_white_colors_count_as_black():
    stats = aggregate_games([
        _game(color=PlayerColor.BLACK, result_label=ResultLabel.LOST),
        _game(color=PlayerColor.UNKNOWN, result_label=ResultLabel.UNKNOWN),
    ])

    assert stats.black == ResultCounts(total=2, lost=1)
    assert stats.white.total == 0
    assert stats.overall == ResultCounts(total=2, lost=1)


def test_game_type_breakdown_and_rates():
    stats = aggregate_games([
        _game(user_rating=1500, date="2024.01.05", move_count=20),
        _game(user_rating=1540, date="2024.01.20", move_count=40, result_label=ResultLabel.DRAW),
        _game(user_rating=1470, date="2024.01.10", move_count=30, result_label=ResultLabel.LOST),
        _game(game_type=GameType.BLITZ, user_rating=1300, move_count=10),
    ])
    rapid = stats.game_types[GameType.RAPID]

    assert list(stats.game_types) == [GameType.RAPID, GameType.BLITZ]
    assert rapid.total == 3
    assert (rapid.results.won, rapid.results.lost, rapid.results.draw) == (1, 1, 1)
    assert rapid.min_rating == 1470
    assert rapid.max_rating == 1540
    assert rapid.rating_range == 70
    assert rapid.average_rating == 1503
    assert rapid.latest_rating == 1540
    assert rapid.average_moves == 30
    assert stats.rating_trackers[GameType.RAPID].change == 40
    assert stats.game_type_distribution() == {GameType.RAPID: 75.0, GameType.BLITZ: 25.0}


def test_game_type_latest_rating_follows_dates_not_arrival():
    type_stats = GameTypeStats(GameType.BLITZ)
    type_stats = type_stats.add_game(ResultLabel.WON, 10, 1600, "2024.03.01")
    type_stats = type_stats.add_game(ResultLabel.WON, 10, 1550, "2024.02.01")

    assert type_stats.latest_rating == 1600
    assert type_stats.dates == ("2024.03.01", "2024.02.01")


def test_move_count_summaries():
    stats = aggregate_games([_game(move_count=n) for n in (40, 10, 25, 31)])

    assert stats.shortest_game == 10
    assert stats.longest_game == 40
    assert stats.median_game_length == 31
    assert stats.average_moves == 26.5


def test_empty_aggregate_readings():
    stats = AggregateStatistics()

    assert stats.average_moves == 0
    assert stats.shortest_game == 0
    assert stats.median_game_length == 0
    assert stats.game_type_distribution() == {}
    assert stats.overall.win_rate == 0


def test_two_block_archive_end_to_end(pgn_block):
    archive = "\n\n".join([
        pgn_block(white="me", black="them", result="1-0", time_control="180+2", white_elo="1500"),
        pgn_block(white="them", black="me", result="1/2-1/2", time_control="600", black_elo="1450"),
    ])

    games = [parse_game_block(block, "me") for block in split_archive(archive)]
    stats = aggregate_games(games)

    assert stats.total_games == 2
    assert stats.overall.won == 1
    assert stats.overall.draw == 1
    assert stats.game_types[GameType.BLITZ].total == 1
    assert stats.game_types[GameType.RAPID].total == 1
    assert stats.white.won == 1
    assert stats.black.draw == 1
