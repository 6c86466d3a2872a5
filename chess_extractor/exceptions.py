# chess_extractor/exceptions.py
"""
Defines custom exceptions for the Chess Move Extractor.

The parsing core never raises on bad game data; it degrades to sentinel
values instead. The exceptions below are raised only by the collaborators
around it (network retrieval, configuration, report persistence) and share a
common `ChessExtractorError` base so the CLI can catch them in one place.
"""

from typing import Optional


class ChessExtractorError(Exception):
    """Base class for all application-specific, catchable errors."""
    pass


class ArchiveRetrievalError(ChessExtractorError):
    """
    Raised when a game archive cannot be downloaded.

    This covers transport failures (connection refused, timeouts that survived
    every retry) and HTTP responses other than 200 and 404. A 404 is not an
    error: it means the period holds no games.

    Attributes:
        url: The URL that failed.
        status_code: The HTTP status code, if a response was received.
    """
    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ConfigurationError(ChessExtractorError):
    """Raised when the run input (username, year, month, filter) is invalid."""
    pass


class ReportGenerationError(ChessExtractorError):
    """Raised for errors encountered while writing the text report."""
    pass
