"""
Centralized Logging

Architectural Intent:
- One place that decides where cairn log lines go and how they look
- Human-readable lines for terminals, JSON lines for log shippers
- CLI flags (--verbose, --debug, --json-logs) map straight onto configure_logging

Design Decisions:
- Only the "cairn" logger tree is configured; library loggers keep their own
  settings except the Azure SDK, whose HTTP policy logs every request at INFO
  and is held at WARNING unless cairn itself runs at DEBUG
- Records logged with extra={"resource": ...} carry the resource id into the
  JSON output
"""

import json
import logging
import sys
from datetime import datetime, UTC

HUMAN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
AZURE_SDK_LOGGERS = ("azure", "azure.identity")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        resource = getattr(record, "resource", None)
        if resource:
            entry["resource"] = resource
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def resolve_level(name: str, default: int = logging.WARNING) -> int:
    """Map a level name such as "debug" to its logging constant."""
    level = logging.getLevelName(name.upper()) if name else default
    return level if isinstance(level, int) else default


def configure_logging(level: int = logging.INFO, json_format: bool = False) -> None:
    """Send cairn logs to stderr at `level`, replacing earlier configuration."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(HUMAN_FORMAT))

    logger = logging.getLogger("cairn")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)

    sdk_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in AZURE_SDK_LOGGERS:
        logging.getLogger(name).setLevel(sdk_level)
