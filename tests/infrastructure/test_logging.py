"""Tests for centralized logging."""

import json
import logging
import sys

from cairn.infrastructure.logging import JSONFormatter, configure_logging, resolve_level


class TestConfigureLogging:
    def test_sets_level(self):
        configure_logging(level=logging.DEBUG)
        logger = logging.getLogger("cairn")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_reconfigure_replaces_handler(self):
        configure_logging(level=logging.INFO)
        configure_logging(level=logging.WARNING)
        logger = logging.getLogger("cairn")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_json_format(self):
        configure_logging(level=logging.INFO, json_format=True)
        handler = logging.getLogger("cairn").handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_azure_sdk_quiet_unless_debug(self):
        configure_logging(level=logging.INFO)
        assert logging.getLogger("azure").level == logging.WARNING
        configure_logging(level=logging.DEBUG)
        assert logging.getLogger("azure").level == logging.DEBUG


class TestJSONFormatter:
    def test_format(self):
        record = logging.LogRecord(
            "cairn.test", logging.WARNING, __file__, 1, "disk %s drifted", ("rg/disk",), None
        )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "cairn.test"
        assert entry["message"] == "disk rg/disk drifted"
        assert "timestamp" in entry
        assert "resource" not in entry

    def test_resource_extra(self):
        record = logging.LogRecord(
            "cairn", logging.WARNING, __file__, 1, "rejected", (), None
        )
        record.resource = "Disk/rg/disk"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["resource"] == "Disk/rg/disk"

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "cairn", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


class TestResolveLevel:
    def test_known_names(self):
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level("INFO") == logging.INFO

    def test_unknown_name_uses_default(self):
        assert resolve_level("chatty") == logging.WARNING
        assert resolve_level("", default=logging.ERROR) == logging.ERROR
