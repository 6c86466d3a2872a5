# chess_extractor/output/report_generator.py
"""
Provides a service for writing the extraction report to a text file.

This module contains the `ReportGenerator`, a "dumb" I/O service responsible
only for formatting and writing. It contains no statistics logic and relies on
the core to hand it parsed games and a finished `AggregateStatistics`.

The report has two parts: one entry per accepted game, appended as the games
are processed, followed by a fixed block of statistics sections.
"""

from pathlib import Path
from typing import List, TYPE_CHECKING

import structlog

from chess_extractor.exceptions import ReportGenerationError
from chess_extractor.types import AcceptedGame

if TYPE_CHECKING:
    from chess_extractor.config.settings import RunConfig
    from chess_extractor.core.stats_aggregator import AggregateStatistics, ResultCounts

logger = structlog.get_logger(__name__)


def format_decimal(value: float) -> str:
    """Formats a number with at most two decimals and no trailing zeros (e.g. 50, 33.33)."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _signed(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


class ReportGenerator:
    """A stateless service that renders and appends report sections to a file."""

    _TITLE = "CHESS.COM GAME STATISTICS"
    _FOOTER = "Analysis generated by chess-move-extractor"

    def __init__(self, width: int = 60):
        self._width = width

    # --- Formatting -------------------------------------------------------

    def _separator(self) -> str:
        return "=" * self._width

    def _center(self, text: str) -> str:
        padding = max(0, (self._width - len(text)) // 2)
        return " " * padding + text

    @staticmethod
    def format_game_entry(accepted: AcceptedGame) -> str:
        """Renders one game as a heading line, a metadata line and its moves."""
        game = accepted.game
        rating = game.user_rating if game.user_rating > 0 else "?"
        return (
            f"--- Game {accepted.index} {game.result_label.value} "
            f"{game.time_control_display} ({game.game_type.value}) ---\n"
            f"Color: {game.color.value} | Rating: {rating} | Date: {game.date}\n"
            f"{game.moves}\n\n"
        )

    @staticmethod
    def _format_result_line(counts: "ResultCounts", won: str = "Won", lost: str = "Lost") -> str:
        return (
            f"{won}: {counts.won} ({format_decimal(counts.win_rate)}%) | "
            f"{lost}: {counts.lost} ({format_decimal(counts.loss_rate)}%) | "
            f"Draw: {counts.draw} ({format_decimal(counts.draw_rate)}%)"
        )

    def _format_overall(self, stats: "AggregateStatistics") -> str:
        if stats.total_games == 0:
            return "No games found."
        return (
            f"Total Games: {stats.total_games}\n"
            f"{self._format_result_line(stats.overall)}\n"
            f"Average Moves per Game: {format_decimal(stats.average_moves)}\n"
            f"Win Rate: {format_decimal(stats.overall.win_rate)}%"
        )

    @staticmethod
    def _format_rating_changes(stats: "AggregateStatistics") -> str:
        if not stats.rating_trackers:
            return "No rating data available."
        return "".join(
            f"{game_type.value:<12}: {_signed(tracker.change)} "
            f"(Start: {tracker.starting}, End: {tracker.latest}, Avg: {tracker.average})\n"
            for game_type, tracker in stats.rating_trackers.items()
        )

    def _format_game_types(self, stats: "AggregateStatistics") -> str:
        if not stats.game_types:
            return "No game type data available."
        sections: List[str] = []
        for type_stats in stats.game_types.values():
            if type_stats.total == 0:
                continue
            sections.append(
                f"\n{type_stats.game_type.value} (Total: {type_stats.total}):\n"
                f"  {self._format_result_line(type_stats.results, won='Win', lost='Loss')}\n"
                f"  Avg Moves: {format_decimal(type_stats.average_moves)} | "
                f"Avg Rating: {type_stats.average_rating}\n"
                f"  Rating Range: {type_stats.rating_range} ({type_stats.min_rating} - "
                f"{type_stats.max_rating}, Latest: {type_stats.latest_rating})\n"
            )
        return "".join(sections)

    def _format_colors(self, stats: "AggregateStatistics") -> str:
        sections: List[str] = []
        for label, counts in (("White", stats.white), ("Black", stats.black)):
            if counts.total > 0:
                sections.append(
                    f"\nAs {label} ({counts.total} games):\n"
                    f"  {self._format_result_line(counts, won='Win', lost='Loss')}\n"
                )
        return "".join(sections)

    @staticmethod
    def _format_additional(stats: "AggregateStatistics") -> str:
        lines: List[str] = []
        if stats.move_counts:
            lines.append(f"Shortest Game: {stats.shortest_game} moves\n")
            lines.append(f"Longest Game: {stats.longest_game} moves\n")
            lines.append(f"Median Game Length: {stats.median_game_length} moves\n")

        distribution = stats.game_type_distribution()
        if distribution:
            lines.append("\nGame Type Distribution:\n")
            for game_type, percentage in distribution.items():
                lines.append(
                    f"  {game_type.value:<12}: {stats.game_types[game_type].total} games "
                    f"({format_decimal(percentage)}%)\n"
                )
        return "".join(lines)

    def format_statistics(self, stats: "AggregateStatistics", run_config: "RunConfig") -> str:
        """Renders the full statistics block appended after the game entries."""
        parts = [
            "\n" + self._separator(),
            "\n" + self._center(self._TITLE),
            "\n" + self._center(f"Username: {run_config.username} | Period: {run_config.period_label}"),
            "\n" + self._separator(),
            "\n\n" + self._center("OVERALL STATISTICS"),
            "\n" + self._format_overall(stats),
            "\n\n" + self._center("RATING CHANGES"),
            "\n" + self._format_rating_changes(stats),
            "\n\n" + self._center("PERFORMANCE BY GAME TYPE"),
            "\n" + self._format_game_types(stats),
            "\n\n" + self._center("RESULTS BY COLOR"),
            "\n" + self._format_colors(stats),
            "\n\n" + self._center("ADDITIONAL STATISTICS"),
            "\n" + self._format_additional(stats),
            "\n" + self._separator(),
            "\n" + self._center(self._FOOTER),
            "\n" + self._separator(),
        ]
        return "".join(parts)

    @staticmethod
    def format_console_summary(stats: "AggregateStatistics") -> str:
        """Renders the short summary printed to the console after a run."""
        lines = [
            "=== SUMMARY ===",
            f"Total Games Processed: {stats.total_games}",
            f"Win Rate: {stats.overall.win_rate:.2f}%",
            f"Average Moves per Game: {stats.average_moves:.1f}",
        ]
        if stats.game_types:
            lines.append("\nGame Types Played:")
            lines.extend(
                f"  {game_type.value}: {type_stats.total} games"
                for game_type, type_stats in stats.game_types.items()
            )
        if stats.rating_trackers:
            lines.append("\nRating Changes:")
            lines.extend(
                f"  {game_type.value}: {_signed(tracker.change)}"
                for game_type, tracker in stats.rating_trackers.items()
            )
        return "\n".join(lines)

    # --- File I/O ---------------------------------------------------------

    def _write(self, output_path: Path, text: str, mode: str) -> None:
        try:
            with output_path.open(mode, encoding="utf-8") as report_file:
                report_file.write(text)
        except OSError as e:
            raise ReportGenerationError(f"Failed to write report to {output_path}") from e

    def start_report(self, output_path: Path) -> None:
        """Creates (or truncates) the report file, creating parent directories."""
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReportGenerationError(f"Cannot create report directory for {output_path}") from e
        self._write(output_path, "", "w")
        logger.debug("Report file created.", path=str(output_path))

    def append_game(self, output_path: Path, accepted: AcceptedGame) -> None:
        """Appends a single game entry to the report."""
        self._write(output_path, self.format_game_entry(accepted), "a")

    def append_statistics(
        self, output_path: Path, stats: "AggregateStatistics", run_config: "RunConfig"
    ) -> None:
        """
        Appends the statistics sections to the report.

        Raises:
            ReportGenerationError: If the file cannot be written.
        """
        self._write(output_path, self.format_statistics(stats, run_config), "a")
        logger.info("Statistics appended to report.", path=str(output_path), games=stats.total_games)
