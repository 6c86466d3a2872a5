"""
Defines the Dependency Injection (DI) container for the application.

This module uses the `punq` library to manage the creation and wiring of the
archive client, report generator and orchestrator for one run, so tests and
alternative front ends can swap any of them out.
"""

import punq

from chess_extractor.config.settings import RunConfig, Settings
from chess_extractor.orchestration.orchestrator import ExtractionOrchestrator
from chess_extractor.output.report_generator import ReportGenerator
from chess_extractor.services.archive_client import ChessComArchiveClient
from chess_extractor.statistics import StatisticsTracker
from chess_extractor.types import ArchiveSource


def get_container(run_config: RunConfig, app_settings: Settings) -> punq.Container:
    """
    Initializes and returns a DI container configured for a specific run.
    """
    container = punq.Container()

    # Register instances that are created outside the container's control.
    container.register(RunConfig, instance=run_config)
    container.register(Settings, instance=app_settings)

    # A single HTTP session is shared by everything that downloads archives.
    container.register(
        ChessComArchiveClient, factory=lambda: ChessComArchiveClient(app_settings.api), scope=punq.Scope.singleton
    )
    container.register(ArchiveSource, factory=lambda: container.resolve(ChessComArchiveClient))
    container.register(ReportGenerator, factory=lambda: ReportGenerator(width=app_settings.report.width))
    container.register(StatisticsTracker, scope=punq.Scope.singleton)

    container.register(
        ExtractionOrchestrator,
        factory=lambda: ExtractionOrchestrator(
            run_config,
            container.resolve(ArchiveSource),
            container.resolve(ReportGenerator),
            container.resolve(StatisticsTracker),
        ),
    )

    return container
