from __future__ import annotations

import logging

from .settings import get_settings


class StructuredFormatter(logging.Formatter):
    """Formatter that adds structured fields for the hook kind and event."""

    def format(self, record: logging.LogRecord) -> str:
        hook = getattr(record, "hook", "-")
        event = getattr(record, "event", "-")
        message = f"{record.levelname}: {record.getMessage()} | hook={hook} | event={event}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def get_logger() -> logging.Logger:
    """Return the package logger, attaching its handler on first use."""
    settings = get_settings()
    logger = logging.getLogger(settings.logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        if settings.structured_logs:
            handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(settings.log_level.upper())
    return logger
