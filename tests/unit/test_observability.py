"""Tests for JSON log lines, correlation IDs and logger setup."""

import json
import logging
import sys

import pytest

from geoitaly.observability.logging import (
    TEXT_FORMAT,
    JSONFormatter,
    correlation_id,
    get_correlation_id,
    setup_logging,
)


def _record(msg: str = "Loaded 9 records", **attrs) -> logging.LogRecord:
    record = logging.getLogger("geoitaly.ingestion.loader").makeRecord(
        "geoitaly.ingestion.loader", logging.INFO, __file__, 10, msg, (), None,
    )
    record.__dict__.update(attrs)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    def test_one_json_object_per_line(self):
        line = JSONFormatter().format(_record())
        assert "\n" not in line
        parsed = json.loads(line)
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "geoitaly.ingestion.loader"
        assert parsed["message"] == "Loaded 9 records"
        assert parsed["timestamp"].endswith("+00:00")

    def test_no_correlation_id_outside_requests(self):
        assert "correlation_id" not in json.loads(JSONFormatter().format(_record()))

    def test_correlation_id_of_current_request(self):
        token = correlation_id.set("req-7f3a")
        try:
            parsed = json.loads(JSONFormatter().format(_record()))
        finally:
            correlation_id.reset(token)
        assert parsed["correlation_id"] == "req-7f3a"

    def test_known_extra_fields_copied(self):
        record = _record(dataset="gi_comuni_cap.json", result_count=3, unrelated="x")
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["dataset"] == "gi_comuni_cap.json"
        assert parsed["result_count"] == 3
        assert "unrelated" not in parsed

    def test_custom_extra_fields(self):
        record = _record(dataset="gi_regioni.json", region="03")
        parsed = json.loads(JSONFormatter(extra_fields=("region",)).format(record))
        assert parsed["region"] == "03"
        assert "dataset" not in parsed

    def test_exception_traceback_included(self):
        try:
            raise ValueError("bad superficie_kmq")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        parsed = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad superficie_kmq" in parsed["exception"]


class TestCorrelationID:
    def test_empty_by_default(self):
        assert get_correlation_id() == ""

    async def test_visible_from_awaited_calls(self):
        seen = []

        async def handler():
            seen.append(get_correlation_id())

        token = correlation_id.set("req-async")
        try:
            await handler()
        finally:
            correlation_id.reset(token)

        assert seen == ["req-async"]
        assert get_correlation_id() == ""


class TestSetupLogging:
    def test_json_handler(self, restore_root_logger):
        setup_logging(json_format=True, level="warning")
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
        assert restore_root_logger.level == logging.WARNING

    def test_text_handler(self, restore_root_logger):
        setup_logging(json_format=False, level="DEBUG")
        formatter = restore_root_logger.handlers[0].formatter
        assert not isinstance(formatter, JSONFormatter)
        assert formatter._fmt == TEXT_FORMAT
        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging(json_format=False, level="chatty")
        assert restore_root_logger.level == logging.INFO

    def test_repeated_setup_keeps_one_handler(self, restore_root_logger):
        setup_logging()
        setup_logging()
        assert len(restore_root_logger.handlers) == 1

    def test_uvicorn_access_quieted(self, restore_root_logger):
        setup_logging(level="DEBUG")
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
