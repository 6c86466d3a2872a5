"""
Configures structured logging for the extractor using structlog.

Both structlog loggers and standard-library loggers (requests and urllib3 log
through the latter) end up in the same handlers, rendered for humans on the
console and as one JSON object per line in the optional log file.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from structlog.types import Processor

# Third-party loggers that are noisy at INFO and below.
NOISY_LOGGERS = ("urllib3", "requests")


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _handler(stream_or_path, renderer: Processor, pre_chain: List[Processor]) -> logging.Handler:
    if isinstance(stream_or_path, Path):
        stream_or_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(stream_or_path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream_or_path)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processor=renderer)
    )
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_to_console: bool = True,
    log_file: Optional[Path] = None,
    force_json_console: bool = False,
) -> None:
    """
    Configures structlog and the standard-library root logger.

    Args:
        log_level: Name of the minimum level, e.g. "INFO" or "debug".
        log_to_console: Whether to log to stderr. Stdout is left to the CLI's
            own messages and the console summary.
        log_file: Optional path of a JSON-lines log file.
        force_json_console: Render console logs as JSON instead of the
            coloured development format.
    """
    level = log_level.upper()
    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: List[logging.Handler] = []
    if log_to_console:
        console_renderer: Processor = (
            structlog.processors.JSONRenderer()
            if force_json_console
            else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
        handlers.append(_handler(sys.stderr, console_renderer, shared_processors))
    if log_file:
        handlers.append(_handler(Path(log_file), structlog.processors.JSONRenderer(), shared_processors))

    logging.basicConfig(handlers=handlers, level=level, force=True)

    if level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
