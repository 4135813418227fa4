import json
import logging
import sys
from datetime import datetime, timezone

from .config import config

APP_NAME = "propvest"


def _jsonable(value):
    # numpy scalars and pydantic models end up in analysis context
    if hasattr(value, "model_dump"):
        return value.model_dump()
    if hasattr(value, "item"):
        return value.item()
    return str(value)


class JsonLogFormatter(logging.Formatter):
    """
    One JSON object per line. The message is the event name; fields passed as
    `extra={"context": {...}}` are merged in but never replace the envelope keys.
    """

    def format(self, record):
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "app": APP_NAME,
            "env": config.ENV,
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update({k: v for k, v in ctx.items() if k not in payload})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_jsonable)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel((level or config.LOG_LEVEL).upper())
        logger.propagate = False
    return logger
