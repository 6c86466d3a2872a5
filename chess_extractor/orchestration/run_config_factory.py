# chess_extractor/orchestration/run_config_factory.py
"""
A factory for creating RunConfig objects from command-line input.
"""
import argparse
from pathlib import Path
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from chess_extractor.config.settings import RunConfig
from chess_extractor.exceptions import ConfigurationError

Prompt = Callable[[str], str]


class RunConfigFactory:
    """A factory class to centralize the creation of RunConfig objects."""

    # Interactive prompts, in the order the positional arguments are given.
    PROMPTS: Dict[str, str] = {
        "username": "Enter Chess.com username: ",
        "year": "Enter year : ",
        "month": "Enter month (0 for entire year): ",
        "time_control_filter": "Enter time control filter (e.g., 600, 180+2, or 0 for all games): ",
    }

    @staticmethod
    def report_filename(config: RunConfig) -> str:
        """Returns "<user>_<yy>.txt" for a whole year, "<user>_<yy><MM>.txt" otherwise."""
        short_year = config.year[2:]
        if config.is_annual:
            return f"{config.username}_{short_year}.txt"
        return f"{config.username}_{short_year}{int(config.month):02d}.txt"

    @classmethod
    def create(
        cls, username: str, year: str, month: str, time_control_filter: str, output_dir: str = "."
    ) -> RunConfig:
        """
        Validates raw user input and assembles a RunConfig.

        Raises:
            ConfigurationError: If any value fails validation.
        """
        try:
            config = RunConfig(
                username=username, year=year, month=month,
                time_control_filter=time_control_filter, output_path=Path(output_dir),
            )
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
            )
            raise ConfigurationError(f"Invalid input: {problems}") from e

        return config.model_copy(update={"output_path": Path(output_dir) / cls.report_filename(config)})

    @classmethod
    def create_from_cli(
        cls, args: argparse.Namespace, prompt: Prompt = input, output_dir: Optional[str] = None
    ) -> RunConfig:
        """
        Creates a RunConfig from parsed arguments, prompting for any that are missing.

        Args:
            args: A namespace with `username`, `year`, `month` and
                `time_control_filter` attributes, any of which may be None.
            prompt: The function used to ask for missing values.
            output_dir: Directory for the report file.
        """
        values = {}
        for name, question in cls.PROMPTS.items():
            value = getattr(args, name, None)
            values[name] = value if value is not None else prompt(question).strip()
        return cls.create(output_dir=output_dir or ".", **values)
