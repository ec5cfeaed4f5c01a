from __future__ import annotations

import json
import logging

from src.class_attendance.class_attendance.common.logging import InstitutionJsonFormatter, build_logging_config


def test_json_formatter_carries_institution():
    formatter = InstitutionJsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    record = logging.LogRecord("class_attendance.test", logging.INFO, __file__, 1, "Saved %d records", (3,), None)
    record.institution = "pesantren"

    payload = json.loads(formatter.format(record))
    assert payload["message"] == "Saved 3 records"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "class_attendance.test"
    assert payload["institution"] == "pesantren"


def test_json_formatter_uses_current_module():
    from pythonjsonlogger.json import JsonFormatter

    assert InstitutionJsonFormatter.__mro__[1] is JsonFormatter
    assert InstitutionJsonFormatter.__module__.endswith("common.logging")


def test_logging_config_selects_formatter():
    assert build_logging_config(fmt="json")["handlers"]["console"]["formatter"] == "json"
    config = build_logging_config(level="debug")
    assert config["handlers"]["console"]["formatter"] == "standard"
    assert config["loggers"][""]["level"] == "DEBUG"
