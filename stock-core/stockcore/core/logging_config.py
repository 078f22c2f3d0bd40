"""Structured JSON logging for the stock core."""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal

ROOT_LOGGER_NAME = "stockcore"

# LogRecord attributes that are not user-supplied extras
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _default(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return repr(value)


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object, extras included as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_default)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a single JSON stream handler to the ``stockcore`` logger.

    Repeated calls only update the level.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    if not any(getattr(h, "_stockcore", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
        handler._stockcore = True
        root.addHandler(handler)
    root.propagate = False


def reset_logging() -> None:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_stockcore", False):
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
