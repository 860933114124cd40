"""FacebookAds — Structured JSON Logging."""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional

from facebook_ads.config import settings

EXTRA_KEYS = ("path", "object_id", "status_code", "attempt", "records", "duration_ms")


class JSONFormatter(logging.Formatter):
    """Produces structured JSON log lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        # Attach extra fields if present
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        return json.dumps(log_entry, default=str)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a ``facebook_ads.<name>`` logger with a JSON handler.

    ``level`` overrides ``settings.log_level`` for this logger only, e.g.
    ``get_logger("client", "DEBUG")`` to trace Graph requests.
    """
    logger = logging.getLogger(f"facebook_ads.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        # No duplicate lines through the root logger
        logger.propagate = False
    level_name = (level or settings.log_level).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    return logger
