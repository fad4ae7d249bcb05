"""
Logging setup for the KitCast API.

JSON lines in production (or with LOG_FORMAT=json), plain text otherwise.
Recommendation and import summaries go through log_event so their numbers land
as separate JSON keys instead of being buried in the message.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict
from core.config import settings


SERVICE_NAME = "kitcast-api"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with service and environment."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Request middleware and log_event attach structured fields here
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        # enums and datetimes fall back to str()
        return json.dumps(log_data, default=str)


def log_event(logger: logging.Logger, event: str, message: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log ``message`` with ``event`` and ``fields`` carried as extra_fields."""
    logger.log(level, message, extra={"extra_fields": {"event": event, **fields}})


def setup_logging():
    """Configure the root logger once at startup."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.LOG_FORMAT == "json" or settings.ENVIRONMENT == "production":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # SQL echo, HTTP connection pool chatter and multipart parsing
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)

    return root_logger
