"""
Configuration settings for the Chess Move Extractor, powered by Pydantic.

This module centralizes all tunable parameters and the schema of a single run.
`Settings` can be overridden through environment variables, while `RunConfig`
validates what the user typed on the command line or at the prompts.
"""
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Nested Models for Configuration Schemas ---

class ApiSettings(BaseModel):
    """Connection settings for the Chess.com published-data API."""
    base_url: str = Field("https://api.chess.com/pub", description="Root URL of the published-data API.")
    user_agent: str = Field("ChessMoveExtractor/3.0 (Python)", description="User-Agent sent with every request; Chess.com rejects anonymous clients.")
    timeout_seconds: float = Field(15.0, gt=0, description="Connect and read timeout for a single request.")
    retry_attempts: int = Field(3, ge=1, description="Attempts per request before a transient network error becomes fatal.")
    initial_backoff_seconds: float = Field(0.5, ge=0, description="Delay before the first retry; doubled after each attempt.")
    max_backoff_seconds: float = Field(5.0, ge=0, description="Upper bound on the delay between retries.")

class ReportSettings(BaseModel):
    """Layout and location of the text report."""
    width: int = Field(60, ge=20, description="Width used for separators and centred headings.")
    output_dir: str = Field(".", description="Directory the report file is written to.")


class RunConfig(BaseModel):
    """
    Encapsulates all input for a single extraction run.

    `month` is "0" for a whole-year run; `time_control_filter` is "0" to keep
    every game.
    """
    username: str
    year: str
    month: str
    time_control_filter: str = "0"
    output_path: Path

    @field_validator("username", "time_control_filter")
    @classmethod
    def strip_and_require(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        value = value.strip()
        if len(value) != 4 or not value.isdigit():
            raise ValueError(f"year must be a four-digit number, got {value!r}")
        return value

    @field_validator("month")
    @classmethod
    def validate_month(cls, value: str) -> str:
        value = value.strip()
        if not value.isdigit() or not 0 <= int(value) <= 12:
            raise ValueError(f"month must be a number from 0 to 12, got {value!r}")
        return str(int(value))

    @property
    def is_annual(self) -> bool:
        return self.month == "0"

    @property
    def period_label(self) -> str:
        return f"Year {self.year}" if self.is_annual else f"{self.year}-{self.month}"

# --- Main Application Settings Class ---

class Settings(BaseSettings):
    """
    Main configuration class for the application.

    It loads settings from environment variables with the prefix 'CHESS_EXTRACTOR_'.
    Nested models can be configured using a double underscore delimiter, e.g.,
    `CHESS_EXTRACTOR_API__TIMEOUT_SECONDS=30`.
    """
    model_config = SettingsConfigDict(env_prefix='CHESS_EXTRACTOR_', env_nested_delimiter='__')

    api: ApiSettings = Field(default_factory=ApiSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    default_log_level: str = "INFO"
    log_file: Optional[Path] = None

# A singleton instance of the settings, accessible throughout the application.
settings = Settings()
