"""Tests for the JSON log formatter."""

import json
import logging

from tax_invoice_api.core.logger import JSONFormatter


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("tax_invoice_api.test", logging.WARNING, __file__, 1, "ล็อกอินไม่สำเร็จ %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_record_is_single_json_line():
    line = JSONFormatter().format(make_record())
    entry = json.loads(line)

    assert "\n" not in line
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "tax_invoice_api.test"
    assert entry["message"] == "ล็อกอินไม่สำเร็จ x"
    assert entry["timestamp"].endswith("+07:00")


def test_known_extra_fields_are_included():
    entry = json.loads(JSONFormatter().format(make_record(client_key="203.0.113.1", status_code=429, secret="no")))

    assert entry["client_key"] == "203.0.113.1"
    assert entry["status_code"] == 429
    assert "secret" not in entry
