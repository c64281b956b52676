"""Logging utilities and the run-scoped debug log."""
from __future__ import annotations

import logging
from datetime import datetime
from dataclasses import dataclass
from typing import Callable, List, Optional, cast
from uuid import uuid4

import structlog

DEFAULT_LOG_LEVEL = "INFO"


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog for JSON output."""
    log_level = _coerce_log_level(level)

    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        cache_logger_on_first_use=True,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    logging.basicConfig(level=log_level, format="%(message)s")


def _coerce_log_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def get_logger(name: str | None = None) -> structlog.types.FilteringBoundLogger:
    return cast(structlog.types.FilteringBoundLogger, structlog.get_logger(name))


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    level: str
    message: str

    def format(self) -> str:
        return f"[{self.timestamp:%H:%M:%S}] {self.level.upper()}: {self.message}"


class RunLog:
    """Debug log for a single generation run.

    Each pipeline stage receives the log explicitly. Entries are kept for the
    caller (``lines()``) and forwarded to structlog with the run id bound.
    """

    def __init__(
        self,
        run_id: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
        logger: Optional[structlog.types.FilteringBoundLogger] = None,
    ) -> None:
        self.run_id = run_id or uuid4().hex[:12]
        self.clock = clock
        self.entries: List[LogEntry] = []
        self.status_message: str = ""
        self._logger = (logger or get_logger("apa_citations.run")).bind(run_id=self.run_id)

    def debug(self, message: str) -> None:
        self._record("debug", message)
        self._logger.debug(message)

    def status(self, message: str, level: str = "info") -> None:
        """Record a user-facing status update."""
        self.status_message = message
        self._record(level, message)
        if level == "error":
            self._logger.error(message)
        elif level == "warning":
            self._logger.warning(message)
        else:
            self._logger.info(message)

    def lines(self) -> List[str]:
        return [entry.format() for entry in self.entries]

    def _record(self, level: str, message: str) -> None:
        self.entries.append(LogEntry(timestamp=self.clock(), level=level, message=message))


__all__ = ["DEFAULT_LOG_LEVEL", "LogEntry", "RunLog", "get_logger", "setup_logging"]
