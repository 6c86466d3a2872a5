import argparse
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from chess_extractor.exceptions import ConfigurationError
from chess_extractor.orchestration.run_config_factory import RunConfigFactory


def _args(**overrides):
    values = {"username": None, "year": None, "month": None, "time_control_filter": None}
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.mark.parametrize("month, expected", [
    ("0", "hikaru_24.txt"),
    ("3", "hikaru_2403.txt"),
    ("03", "hikaru_2403.txt"),
    ("12", "hikaru_2412.txt"),
])
def test_report_filename(month, expected):
    config = RunConfigFactory.create("hikaru", "2024", month, "0")

    assert config.output_path == Path(".") / expected


def test_create_uses_output_dir(tmp_path):
    config = RunConfigFactory.create("hikaru", "2023", "7", "600", output_dir=str(tmp_path))

    assert config.output_path == tmp_path / "hikaru_2307.txt"
    assert config.time_control_filter == "600"
    assert config.period_label == "2023-7"


@pytest.mark.parametrize("username, year, month", [
    ("", "2024", "1"),
    ("hikaru", "24", "1"),
    ("hikaru", "2024", "13"),
    ("hikaru", "2024", "jan"),
])
def test_create_rejects_invalid_input(username, year, month):
    with pytest.raises(ConfigurationError):
        RunConfigFactory.create(username, year, month, "0")


def test_create_from_cli_uses_arguments_without_prompting():
    prompt = MagicMock()

    config = RunConfigFactory.create_from_cli(
        _args(username="hikaru", year="2024", month="0", time_control_filter="180+2"), prompt=prompt,
    )

    prompt.assert_not_called()
    assert config.is_annual
    assert config.period_label == "Year 2024"


def test_create_from_cli_prompts_for_missing_values():
    prompt = MagicMock(side_effect=[" 2024 ", "5", "0"])

    config = RunConfigFactory.create_from_cli(_args(username="hikaru"), prompt=prompt)

    assert [c.args[0] for c in prompt.call_args_list] == [
        RunConfigFactory.PROMPTS["year"],
        RunConfigFactory.PROMPTS["month"],
        RunConfigFactory.PROMPTS["time_control_filter"],
    ]
    assert config.year == "2024"
    assert config.output_path.name == "hikaru_2405.txt"
