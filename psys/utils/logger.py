"""
Structured logging configuration
"""
import sys
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, TextIO
from pythonjsonlogger import jsonlogger

from psys.utils.config import settings


def component_of(logger_name: str) -> str:
    """Engine layer a logger belongs to: 'psys.core.indices.difference' -> 'core'"""
    parts = logger_name.split(".")
    if parts[0] == "psys" and len(parts) > 1:
        return parts[1]
    return parts[0]


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter tagging every record with the engine layer and app info"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["component"] = component_of(record.name)
        log_record["environment"] = settings.ENVIRONMENT
        log_record["app_version"] = settings.APP_VERSION


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the root logger

    Args:
        level: overrides settings.LOG_LEVEL
        log_format: "json" or "text", overrides settings.LOG_FORMAT
        stream: console stream, stdout by default (the CLI sends logs to
            stderr so a JSON report on stdout stays parseable)
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT

    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    root.handlers.clear()

    if log_format == "json":
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S"
        )

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Per-request access lines come from LoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module"""
    return logging.getLogger(name)


# Initialize logging on import
setup_logging()
