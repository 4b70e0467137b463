"""Structured local logging for the avatar service and CLI."""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import platform
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


_LOGGER_NAME = "initials_avatar"

# Record attributes copied into each JSON line when a call sets them.
CONTEXT_KEYS = ("event", "token", "path", "status", "etag")


def _data_root() -> Path:
    if platform.system() == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "InitialsAvatar"
    if platform.system() == "Darwin":
        return Path.home() / "Library" / "Application Support" / "InitialsAvatar"
    return Path.home() / ".local" / "state" / "initials-avatar"


def log_dir(directory: Path | None = None) -> Path:
    path = directory or (_data_root() / "logs")
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    """One JSON object per record, carrying any avatar context attached to it."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update({key: getattr(record, key) for key in CONTEXT_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def log_event(
    logger: logging.Logger,
    event: str,
    msg: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """Log ``msg`` tagged with ``event`` and the known context fields given.

    Unknown context names raise TypeError so a typo cannot silently drop a field.
    """
    unknown = set(context) - set(CONTEXT_KEYS)
    if unknown:
        raise TypeError(f"unknown log context: {', '.join(sorted(unknown))}")
    extra = {key: value for key, value in context.items() if value is not None}
    extra["event"] = event
    logger.log(level, msg, extra=extra)


def configure_logging(
    keep_files: int = 7,
    console: bool = True,
    directory: Path | None = None,
    level: int = logging.INFO,
) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    path = log_dir(directory) / "initials-avatar.log"
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(console_handler)

    log_event(logger, "logging_configured", f"logging to {path}", path=str(path))
    return logger


def get_logger(child: str | None = None) -> logging.Logger:
    if child:
        return logging.getLogger(f"{_LOGGER_NAME}.{child}")
    return logging.getLogger(_LOGGER_NAME)
