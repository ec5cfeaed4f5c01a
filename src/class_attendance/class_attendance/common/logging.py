"""Logging configuration.

Console output only; `LOG_FORMAT=json` switches to one JSON object per line.
"""
from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter


class InstitutionJsonFormatter(JsonFormatter):
    """JSON formatter that always carries level/logger and the tenant when present."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        if hasattr(record, "institution"):
            log_record["institution"] = record.institution


def build_logging_config(*, level: str = "INFO", fmt: str = "text") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
            "json": {
                "()": InstitutionJsonFormatter,
                "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if fmt == "json" else "standard",
            },
        },
        "loggers": {
            "": {"handlers": ["console"], "level": level.upper()},
            # google-cloud clients are chatty at DEBUG
            "google": {"level": "WARNING"},
            "urllib3": {"level": "WARNING"},
        },
    }


def setup_logging(*, level: str = "INFO", fmt: str = "text") -> logging.Logger:
    logging.config.dictConfig(build_logging_config(level=level, fmt=fmt))
    logger = logging.getLogger("class_attendance")
    logger.debug("Logging initialized with level %s (%s)", level, fmt)
    return logger
