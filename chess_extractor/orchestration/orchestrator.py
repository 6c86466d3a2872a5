# chess_extractor/orchestration/orchestrator.py
"""
The top-level extraction orchestrator.

It drives one run end to end: download the archive, split it into game
blocks, parse and filter each block, fold accepted games into the aggregate,
and write the report. Processing is strictly sequential and in archive order.
"""

from typing import Optional

import structlog

from chess_extractor.config.settings import RunConfig
from chess_extractor.core.archive_segmenter import split_archive
from chess_extractor.core.pgn_parser import parse_game_block
from chess_extractor.core.stats_aggregator import AggregateStatistics, add_game
from chess_extractor.core.time_control import matches_time_control_filter
from chess_extractor.output.report_generator import ReportGenerator
from chess_extractor.statistics import StatisticsTracker, StatKey
from chess_extractor.tracing import new_correlation_id, trace_stage
from chess_extractor.types import AcceptedGame, ArchiveSource, RunReport
from chess_extractor.utils import metrics

logger = structlog.get_logger(__name__)

NO_GAMES_WARNING = "No games found or the user/month/year is invalid."
NO_MATCHES_WARNING = "No games match the specified time control filter."


class ExtractionOrchestrator:
    def __init__(
        self,
        config: RunConfig,
        archive_source: ArchiveSource,
        report_generator: ReportGenerator,
        stats_tracker: Optional[StatisticsTracker] = None,
    ):
        self._config = config
        self._archive_source = archive_source
        self._report_generator = report_generator
        self._stats_tracker = stats_tracker or StatisticsTracker()

    @trace_stage
    def _fetch_archive(self) -> str:
        # ArchiveRetrievalError propagates: no block is processed after a failed download.
        return self._archive_source.fetch_archive(
            self._config.username, self._config.year, self._config.month
        )

    def _skip(self, key: StatKey, reason: str) -> None:
        self._stats_tracker.add_stat(key)
        self._stats_tracker.add_stat(StatKey.GAMES_SKIPPED_TOTAL)
        metrics.GAMES_SKIPPED_TOTAL.labels(reason=reason).inc()

    @trace_stage
    def _process_archive(self, archive_text: str) -> RunReport:
        config = self._config
        output_path = config.output_path
        self._report_generator.start_report(output_path)

        stats = AggregateStatistics()
        blocks_read = 0
        accepted = 0

        for game_block in split_archive(archive_text):
            game = parse_game_block(game_block, config.username)
            if game is None:
                self._skip(StatKey.SKIPPED_MALFORMED, "malformed_block")
                continue

            blocks_read += 1
            self._stats_tracker.add_stat(StatKey.BLOCKS_READ)
            metrics.BLOCKS_READ_TOTAL.inc()

            if not matches_time_control_filter(game.time_control_raw, config.time_control_filter):
                logger.debug("Skipped (time control filter).", block=blocks_read, time_control=game.time_control_raw)
                self._skip(StatKey.SKIPPED_TIME_CONTROL, "time_control_filter")
                continue

            accepted += 1
            self._stats_tracker.add_stat(StatKey.GAMES_ACCEPTED)
            metrics.GAMES_ACCEPTED_TOTAL.inc()
            stats = add_game(stats, game)
            self._report_generator.append_game(output_path, AcceptedGame(index=accepted, game=game))
            logger.debug("Added game.", block=blocks_read, game_number=accepted)

        logger.info("Finished processing games.", accepted=accepted, blocks=blocks_read)

        report = RunReport(
            blocks_read=blocks_read, games_accepted=accepted,
            statistics=stats, report_path=output_path,
        )
        if accepted:
            self._report_generator.append_statistics(output_path, stats, config)
        else:
            report.warnings.append(NO_MATCHES_WARNING)
        return report

    def run(self) -> RunReport:
        """
        Executes one extraction run.

        Returns:
            A `RunReport`. An empty archive produces a report with zero games,
            no report file, and a warning.

        Raises:
            ArchiveRetrievalError: If the archive could not be downloaded.
            ReportGenerationError: If the report file could not be written.
        """
        correlation = new_correlation_id(self._config.username, self._config.period_label)
        structlog.contextvars.bind_contextvars(**correlation.as_dict())
        self._stats_tracker.reset()
        logger.info("Starting extraction run.", filter=self._config.time_control_filter)
        try:
            archive_text = self._fetch_archive()
            if not archive_text.strip():
                logger.warning(NO_GAMES_WARNING)
                return RunReport(
                    blocks_read=0, games_accepted=0,
                    statistics=AggregateStatistics(), warnings=[NO_GAMES_WARNING],
                )

            report = self._process_archive(archive_text)
            self._stats_tracker.log_summary()
            return report
        finally:
            structlog.contextvars.unbind_contextvars(*correlation.as_dict())
