"""Root logger setup: JSON lines for deployments, rich text for terminals."""

from __future__ import annotations

import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite", "sqlalchemy.engine")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that always emits ``timestamp`` and an upper-case ``level``."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("timestamp", self.formatTime(record, self.datefmt))
        log_record["level"] = str(log_record.get("level") or record.levelname).upper()


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter(  # type: ignore[no-untyped-call]
            "%(timestamp)s %(level)s %(name)s %(message)s", json_ensure_ascii=False
        )
    )
    return handler


def _text_handler() -> logging.Handler:
    from rich.logging import RichHandler

    return RichHandler(rich_tracebacks=True, markup=False, show_path=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Replace the root handlers with one JSON or rich handler."""

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(_json_handler() if fmt.lower() == "json" else _text_handler())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["CustomJsonFormatter", "setup_logging"]
