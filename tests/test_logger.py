"""Tests for the JSON log formatter"""
import json
import logging
import sys

from sge.utils.logger import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("sge", logging.WARNING, __file__, 12, "login failed for %s", ("a@x.com",), None)
    record.__dict__.update(extra)
    return record


def test_format_emits_one_json_object():
    line = JSONFormatter().format(_record())
    data = json.loads(line)

    assert data["level"] == "WARNING"
    assert data["service"] == "sge"
    assert data["logger"] == "sge"
    assert data["message"] == "login failed for a@x.com"
    assert data["source"].endswith(":12")
    assert "\n" not in line


def test_extra_fields_are_merged():
    data = json.loads(JSONFormatter().format(_record(user_id="u-1", action="login", error_code="INVALID_CREDENTIALS")))

    assert data["user_id"] == "u-1"
    assert data["action"] == "login"
    assert data["error_code"] == "INVALID_CREDENTIALS"
    assert "args" not in data
    assert "levelno" not in data


def test_non_serialisable_extra_is_stringified():
    data = json.loads(JSONFormatter().format(_record(employee_id=7, reason=ValueError("boom"))))

    assert data["employee_id"] == 7
    assert data["reason"] == "boom"


def test_exception_is_included():
    try:
        raise RuntimeError("database unavailable")
    except RuntimeError:
        record = logging.LogRecord("sge", logging.ERROR, __file__, 30, "readiness failed", (), None)
        record.exc_info = sys.exc_info()

    data = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: database unavailable" in data["exception"]
