import json
from unittest.mock import MagicMock

import pytest
import requests

from chess_extractor.config.settings import ApiSettings
from chess_extractor.exceptions import ArchiveRetrievalError
from chess_extractor.services.archive_client import (
    ChessComArchiveClient,
    archive_url_matches_period,
    extract_archive_urls,
)

BASE = "https://api.chess.com/pub"


def _response(status_code: int, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def api_settings():
    return ApiSettings(retry_attempts=2, initial_backoff_seconds=0, max_backoff_seconds=0)


@pytest.fixture
def session():
    return MagicMock()


def test_fetch_month_builds_url_and_returns_body(api_settings, session):
    session.get.return_value = _response(200, "[Event \"x\"]")
    client = ChessComArchiveClient(api_settings, session=session)

    body = client.fetch_archive("alice", "2024", "3")

    assert body == "[Event \"x\"]"
    session.get.assert_called_once_with(f"{BASE}/player/alice/games/2024/03/pgn", timeout=15.0)
    session.headers.update.assert_called_once()


def test_not_found_means_no_data(api_settings, session):
    session.get.return_value = _response(404)
    client = ChessComArchiveClient(api_settings, session=session)

    assert client.fetch_month("alice", "2024", "3") == ""


def test_http_error_raises(api_settings, session):
    session.get.return_value = _response(500)
    client = ChessComArchiveClient(api_settings, session=session)

    with pytest.raises(ArchiveRetrievalError) as exc_info:
        client.fetch_month("alice", "2024", "3")

    assert exc_info.value.status_code == 500
    assert exc_info.value.url.endswith("/2024/03/pgn")


def test_transient_errors_are_retried_then_raised(api_settings, session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    client = ChessComArchiveClient(api_settings, session=session)

    with pytest.raises(ArchiveRetrievalError):
        client.fetch_month("alice", "2024", "3")

    assert session.get.call_count == 2


def test_transient_error_then_success(api_settings, session):
    session.get.side_effect = [requests.Timeout("slow"), _response(200, "pgn")]
    client = ChessComArchiveClient(api_settings, session=session)

    assert client.fetch_month("alice", "2024", "3") == "pgn"


def test_fetch_year_concatenates_months_of_that_year(api_settings, session):
    listing = json.dumps({"archives": [
        f"{BASE}/player/alice/games/2023/12",
        f"{BASE}/player/alice/games/2024/01",
        f"{BASE}/player/alice/games/2024/02",
        f"{BASE}/player/alice/games/2024/03",
    ]})
    responses = {
        f"{BASE}/player/alice/games/archives": _response(200, listing),
        f"{BASE}/player/alice/games/2024/01/pgn": _response(200, "JANUARY"),
        f"{BASE}/player/alice/games/2024/02/pgn": _response(500),
        f"{BASE}/player/alice/games/2024/03/pgn": _response(200, "MARCH"),
    }
    session.get.side_effect = lambda url, timeout: responses[url]
    client = ChessComArchiveClient(api_settings, session=session)

    body = client.fetch_archive("alice", "2024", "0")

    assert body == "JANUARY\nMARCH\n"


def test_fetch_year_without_archives(api_settings, session):
    session.get.return_value = _response(200, '{"archives": []}')
    client = ChessComArchiveClient(api_settings, session=session)

    assert client.fetch_year("alice", "2024") == ""


def test_fetch_year_listing_failure_is_fatal(api_settings, session):
    session.get.return_value = _response(403)
    client = ChessComArchiveClient(api_settings, session=session)

    with pytest.raises(ArchiveRetrievalError):
        client.fetch_year("alice", "2024")


def test_extract_archive_urls():
    payload = '{"archives":["https:\\/\\/api.chess.com\\/pub\\/player\\/a\\/games\\/2024\\/01", " not-a-url ", 7]}'

    assert extract_archive_urls(payload) == ["https://api.chess.com/pub/player/a/games/2024/01"]


@pytest.mark.parametrize("payload", [
    "",
    "not json",
    '{"archives": "https://x"}',
    '{"other": []}',
    '["https://x"]',
    '{"archives": [',
])
def test_extract_archive_urls_malformed(payload):
    assert extract_archive_urls(payload) == []


def test_archive_url_matches_period():
    url = f"{BASE}/player/alice/games/2024/03"

    assert archive_url_matches_period(url, "2024")
    assert archive_url_matches_period(url + "/", "2024", "3")
    assert not archive_url_matches_period(url, "2023")
    assert not archive_url_matches_period(url, "2024", "4")
