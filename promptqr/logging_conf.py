"""Application logging configuration helpers."""
from __future__ import annotations

import json
import logging
from logging.config import dictConfig
from typing import Any

from .config import Settings, settings

TEXT_FORMAT = "%(levelname)s %(name)s %(message)s"

_RESERVED_KEYS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields are merged into it."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - overrides base
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({k: v for k, v in record.__dict__.items() if k not in _RESERVED_KEYS})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(config: Settings | None = None) -> None:
    """Configure global logging based on settings."""

    config = config or settings
    if config.logging.json_logs:
        formatter: dict[str, Any] = {"()": JsonFormatter}
    else:
        formatter = {"format": TEXT_FORMAT}

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": formatter},
            "handlers": {
                "default": {
                    "level": config.logging.level,
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                }
            },
            "loggers": {
                "": {
                    "handlers": ["default"],
                    "level": config.logging.level,
                }
            },
        }
    )
