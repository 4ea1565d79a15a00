"""Structured JSON logging helpers."""
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Union

from .config import LoggingSettings, get_logging_settings


class JsonFormatter(logging.Formatter):
    """Render log records as structured JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        extra = getattr(record, "extra_fields", None)
        if extra:
            log_record.update(extra)

        return json.dumps(log_record, default=str)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _build_handlers(settings: LoggingSettings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if settings.log_to_console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if settings.log_to_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(JsonFormatter())
    return handlers


def configure_logging(
    settings: Optional[LoggingSettings] = None,
    level: Optional[Union[int, str]] = None,
) -> None:
    """Configure the root logger with JSON output.

    Console and file output follow ``LOG_TO_CONSOLE``/``LOG_TO_FILE``. Once
    configured, later calls only adjust the level.
    """
    settings = settings or get_logging_settings()
    root = logging.getLogger()
    resolved = _resolve_level(level if level is not None else settings.log_level)

    if getattr(configure_logging, "_configured", False):
        root.setLevel(resolved)
        return

    root.setLevel(resolved)
    root.handlers = _build_handlers(settings)
    configure_logging._configured = True  # type: ignore[attr-defined]


__all__ = ["JsonFormatter", "configure_logging"]
