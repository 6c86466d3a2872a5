# chess_extractor/tracing.py

"""
tracing
~~~~~~~

Run identifiers and stage timing for context-aware logging.

Every log line of a run carries the fields of its `CorrelationID` once the
orchestrator binds them to structlog's context variables.
"""

import functools
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Any, Callable

import structlog

logger = structlog.get_logger(__name__)

@dataclass(frozen=True, slots=True)
class CorrelationID:
    """Identifies one extraction run: who was fetched, for which period."""
    run_id: str
    username: str
    period: str

    def as_dict(self) -> dict:
        """Returns the ID as a dictionary suitable for logging."""
        return asdict(self)


def new_correlation_id(username: str, period: str) -> CorrelationID:
    return CorrelationID(run_id=f"run-{uuid.uuid4().hex[:8]}", username=username, period=period)


def trace_stage(func: Callable) -> Callable:
    """Logs entry to, exit from and failure of a processing stage, with its duration."""
    stage_name = func.__name__.lstrip("_")

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        started = time.perf_counter()
        logger.debug("Entering processing stage.", stage=stage_name)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.warning(
                "Processing stage failed.", stage=stage_name,
                error_type=type(e).__name__, elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            raise
        logger.debug(
            "Exiting processing stage.", stage=stage_name,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return result
    return wrapper
