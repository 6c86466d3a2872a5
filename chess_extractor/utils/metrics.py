"""
Centralized Prometheus metrics definitions for the Chess Move Extractor.

This module uses the prometheus-client library to define all metrics the
extractor records. Grouping them here provides a single, clear overview of the
application's instrumentation points.
"""
from prometheus_client import Counter

# A common prefix for all application-specific metrics.
PREFIX = "chess_extractor"

# --- Game Processing Metrics ---

BLOCKS_READ_TOTAL = Counter(
    f"{PREFIX}_blocks_read_total",
    "Total number of game blocks segmented from downloaded archives.",
)

GAMES_ACCEPTED_TOTAL = Counter(
    f"{PREFIX}_games_accepted_total",
    "Total number of games that passed the filter and were aggregated.",
)

GAMES_SKIPPED_TOTAL = Counter(
    f"{PREFIX}_games_skipped_total",
    "Total number of game blocks skipped for any reason.",
    ["reason"],  # e.g., reason="time_control_filter", "malformed_block"
)

# --- Archive Retrieval Metrics ---

ARCHIVE_FETCHES_TOTAL = Counter(
    f"{PREFIX}_archive_fetches_total",
    "Total number of archive HTTP requests, by outcome.",
    ["outcome"],  # e.g., outcome="ok", "not_found", "error"
)

HTTP_TRANSIENT_ERRORS_TOTAL = Counter(
    f"{PREFIX}_http_transient_errors_total",
    "Total number of transient network errors that triggered a retry.",
    ["target"],  # e.g., target="archive"
)
