from unittest.mock import MagicMock, patch

import pytest

from chess_extractor import cli
from chess_extractor.core.stats_aggregator import AggregateStatistics
from chess_extractor.exceptions import ArchiveRetrievalError
from chess_extractor.orchestration.orchestrator import NO_GAMES_WARNING
from chess_extractor.types import RunReport


@pytest.fixture
def container():
    """Patches the DI container so no network or file access happens."""
    fake = MagicMock()
    with patch.object(cli, "get_container", return_value=fake), patch.object(cli, "setup_logging"):
        yield fake


def test_parse_args_positionals():
    args = cli.parse_args(["hikaru", "2024", "3", "180+2", "--output-dir", "out"])

    assert (args.username, args.year, args.month, args.time_control_filter) == ("hikaru", "2024", "3", "180+2")
    assert args.output_dir == "out"


def test_parse_args_missing_positionals_are_none():
    args = cli.parse_args(["hikaru"])

    assert args.year is None and args.month is None and args.time_control_filter is None


def test_main_success(container, tmp_path, capsys):
    report_path = tmp_path / "hikaru_2403.txt"
    orchestrator = container.resolve.return_value
    orchestrator.run.return_value = RunReport(
        blocks_read=0, games_accepted=1, statistics=AggregateStatistics(), report_path=report_path,
    )

    exit_code = cli.main(["hikaru", "2024", "3", "0", "--output-dir", str(tmp_path)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert f"Success! Games saved to: {report_path}" in out
    assert "=== SUMMARY ===" in out
    orchestrator.close.assert_called_once()


def test_main_prints_warning_for_empty_archive(container, capsys):
    container.resolve.return_value.run.return_value = RunReport(
        blocks_read=0, games_accepted=0, statistics=AggregateStatistics(), warnings=[NO_GAMES_WARNING],
    )

    exit_code = cli.main(["hikaru", "2024", "3", "0"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert NO_GAMES_WARNING in out
    assert "Success!" not in out


def test_main_retrieval_failure_prints_hints(container, capsys):
    container.resolve.return_value.run.side_effect = ArchiveRetrievalError(
        "HTTP 410", url="https://api.chess.com/pub/player/x/games/2024/03/pgn", status_code=410,
    )

    exit_code = cli.main(["x", "2024", "3", "0"])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert "Error: HTTP 410" in captured.err
    for hint in cli.FAILURE_HINTS:
        assert hint in captured.out


def test_main_invalid_input(container, capsys):
    exit_code = cli.main(["hikaru", "24", "3", "0"])

    assert exit_code == 2
    assert "Invalid input" in capsys.readouterr().err
    container.resolve.assert_not_called()
