from __future__ import annotations

import json
import logging
import os
from logging.config import dictConfig
from traceback import format_exception

from .env import pick

PLAIN_FORMAT = "%(asctime)s %(levelname)-5s [pid:%(process)d] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per line; used in prod."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, object] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process,
            "message": record.getMessage(),
        }

        http_ctx = {
            k: v
            for k, v in {
                "method": getattr(record, "http_method", None),
                "path": getattr(record, "path", None),
                "status": getattr(record, "status_code", None),
            }.items()
            if v is not None
        }
        if http_ctx:
            payload["http"] = http_ctx

        collection = getattr(record, "collection", None)
        if collection is not None:
            payload["collection"] = collection

        if record.exc_info and record.exc_info[0] is not None:
            stack = "".join(format_exception(*record.exc_info))
            max_stack = int(os.getenv("LOG_STACK_LIMIT", "4000"))
            payload["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stack": stack[:max_stack] + ("...(truncated)" if len(stack) > max_stack else ""),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def _read_level(level: str | None) -> str:
    explicit = level or os.getenv("LOG_LEVEL")
    if explicit:
        return explicit.upper()
    return pick(prod="INFO", nonprod="DEBUG")


def _read_format(fmt: str | None) -> str:
    explicit = fmt or os.getenv("LOG_FORMAT")
    if explicit:
        return "json" if explicit.lower() == "json" else "plain"
    return pick(prod="json", nonprod="plain")


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure the root logger; arguments win over LOG_LEVEL / LOG_FORMAT."""
    level = _read_level(level)
    formatter_name = _read_format(fmt)

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,  # keep uvicorn & friends
            "formatters": {
                "plain": {"format": PLAIN_FORMAT, "datefmt": DATE_FORMAT},
                "json": {"()": JsonFormatter, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "stream": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": formatter_name,
                }
            },
            "root": {"level": level, "handlers": ["stream"]},
            # uvicorn bubbles up to the root handler; pymongo is chatty at DEBUG
            "loggers": {
                "uvicorn": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.error": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.access": {"level": "INFO", "handlers": [], "propagate": True},
                "pymongo": {"level": "WARNING", "handlers": [], "propagate": True},
            },
        }
    )
