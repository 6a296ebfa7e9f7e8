"""Structured Logging — JSON formatter and setup for the proxy's request and import logs.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - user_id, count, path, status_code surfaced at top level when present
    - error_kind / error_code grouped under "error"; page / total_pages under "gorest"
    - JSON format in production, human-readable in development
    - setup_logging called once on startup via lifespan

Design Decisions:
    - httpx logs every GoREST page request at INFO; held at WARNING so an
      upload-all run logs one line per import, not one per page
"""

import logging
import json
from datetime import datetime, timezone

RECORD_KEYS = ("user_id", "count", "path", "status_code")
ERROR_KEYS = {"error_kind": "kind", "error_code": "code"}
GOREST_KEYS = {"page": "page", "total_pages": "total_pages"}


def _group(record: logging.LogRecord, keys: dict[str, str]) -> dict:
    group = {}
    for attr, name in keys.items():
        val = record.__dict__.get(attr)
        if val is not None:
            group[name] = val
    return group


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in RECORD_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        error = _group(record, ERROR_KEYS)
        if error:
            log["error"] = error
        gorest = _group(record, GOREST_KEYS)
        if gorest:
            log["gorest"] = gorest
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines; unexpected faults are tagged with their kind."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        kind = record.__dict__.get("error_kind")
        return f"{line} [{kind}]" if kind else line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ConsoleFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)
