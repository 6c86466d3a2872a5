# chess_extractor/services/archive_client.py
"""
Provides a client for downloading PGN archives from the Chess.com API.

This module is the only part of the application that talks to the network.
It hands the parsing core a single concatenated PGN blob per run and
distinguishes two outcomes the core treats differently: an empty string means
"no games for this period" (HTTP 404, or an empty archive list), while an
`ArchiveRetrievalError` means the download itself failed and the run must stop.
"""

import json
from typing import Any, List, Optional

import requests
import structlog

from chess_extractor.config.settings import ApiSettings
from chess_extractor.exceptions import ArchiveRetrievalError
from chess_extractor.utils import metrics
from chess_extractor.utils.retry import retry_with_backoff

logger = structlog.get_logger(__name__)


def extract_archive_urls(payload: str) -> List[str]:
    """
    Extracts the monthly archive URLs from an `{"archives": [...]}` document.

    Anything that does not fit that shape (invalid JSON, a missing key, a
    non-list value, non-string or non-http entries) is skipped rather than
    raised, so a malformed listing simply yields fewer URLs.
    """
    try:
        document: Any = json.loads(payload)
    except ValueError:
        logger.warning("Archive listing is not valid JSON.", preview=payload[:80])
        return []

    archives = document.get("archives") if isinstance(document, dict) else None
    if not isinstance(archives, list):
        return []

    return [
        url.strip() for url in archives
        if isinstance(url, str) and url.strip().startswith("http")
    ]


def archive_url_matches_period(archive_url: str, year: str, month: Optional[str] = None) -> bool:
    """Checks whether an archive URL ending in ".../YYYY/MM" belongs to the period."""
    parts = archive_url.rstrip("/").split("/")
    if len(parts) < 2:
        return False
    archive_year, archive_month = parts[-2], parts[-1]
    if archive_year != year:
        return False
    return month is None or (archive_month.isdigit() and int(archive_month) == int(month))


class ChessComArchiveClient:
    """
    Downloads a player's games as PGN text from the Chess.com published-data API.

    Monthly runs hit `/player/{user}/games/{YYYY}/{MM}/pgn` directly. Annual runs
    first list the player's archives, keep those for the requested year, and
    concatenate each month's PGN with a separating newline.
    """

    def __init__(self, api_settings: ApiSettings, session: Optional[requests.Session] = None):
        self._settings = api_settings
        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": api_settings.user_agent,
            "Accept": "text/plain, application/json",
        })
        self._get = retry_with_backoff(
            attempts=api_settings.retry_attempts,
            initial_backoff_s=api_settings.initial_backoff_seconds,
            max_backoff_s=api_settings.max_backoff_seconds,
            target="archive",
        )(self._session.get)

    def fetch_text(self, url: str) -> str:
        """
        Fetches a URL and returns its body.

        Returns:
            The response text, or "" when the server answers 404.

        Raises:
            ArchiveRetrievalError: On any other non-200 status, or when a
                network error persists through every retry.
        """
        try:
            response = self._get(url, timeout=self._settings.timeout_seconds)
        except requests.RequestException as e:
            metrics.ARCHIVE_FETCHES_TOTAL.labels(outcome="error").inc()
            raise ArchiveRetrievalError(f"Network error while fetching {url}: {e}", url=url) from e

        if response.status_code == 404:
            metrics.ARCHIVE_FETCHES_TOTAL.labels(outcome="not_found").inc()
            logger.info("No games found at URL.", url=url)
            return ""
        if response.status_code != 200:
            metrics.ARCHIVE_FETCHES_TOTAL.labels(outcome="error").inc()
            raise ArchiveRetrievalError(
                f"HTTP Error: {response.status_code} for URL: {url}",
                url=url, status_code=response.status_code,
            )

        metrics.ARCHIVE_FETCHES_TOTAL.labels(outcome="ok").inc()
        return response.text

    def fetch_month(self, username: str, year: str, month: str) -> str:
        """Fetches one month of games as a PGN blob."""
        url = f"{self._settings.base_url}/player/{username}/games/{year}/{int(month):02d}/pgn"
        logger.info("Fetching monthly archive.", url=url)
        return self.fetch_text(url)

    def fetch_year(self, username: str, year: str) -> str:
        """
        Fetches every monthly archive of `year` and concatenates them.

        A month that fails to download is logged and skipped; a failure to
        download the archive listing itself is fatal.
        """
        listing_url = f"{self._settings.base_url}/player/{username}/games/archives"
        logger.info("Fetching annual game archives.", url=listing_url)
        listing = self.fetch_text(listing_url)
        if not listing:
            return ""

        monthly_urls = [url for url in extract_archive_urls(listing) if archive_url_matches_period(url, year)]
        if not monthly_urls:
            logger.info("No monthly archives found.", year=year)
            return ""

        logger.info("Found monthly archives.", count=len(monthly_urls))
        bodies: List[str] = []
        for archive_number, monthly_url in enumerate(monthly_urls, start=1):
            logger.info("Processing archive.", archive=archive_number, of=len(monthly_urls))
            try:
                body = self.fetch_text(f"{monthly_url}/pgn")
            except ArchiveRetrievalError as e:
                logger.warning("Skipping archive.", url=monthly_url, error=str(e))
                continue
            if body:
                bodies.append(body + "\n")
        return "".join(bodies)

    def fetch_archive(self, username: str, year: str, month: str) -> str:
        """Fetches the whole year when `month` is "0", otherwise a single month."""
        if month.strip() == "0":
            return self.fetch_year(username, year)
        return self.fetch_month(username, year, month)

    def close(self) -> None:
        self._session.close()
