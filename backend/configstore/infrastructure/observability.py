"""Structured Logging — JSON lines carrying the datasource a record is about.

Invariants:
    - Every line has timestamp, level, logger and message
    - The service's extra keys (project, datasource, operation) are grouped
      under one "datasource" object; absent keys are omitted, an empty
      project is kept and means the global scope
    - error_code and path (from the HTTP error handlers) stay top-level
    - text format prints the same context as a bracketed suffix

Design Decisions:
    - Formatter on the stdlib logging module: the service only ever sees a
      logging.Logger, so output shape changes never touch it
    - setup_logging called once on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

# LogRecord attribute -> key inside the "datasource" object
_DATASOURCE_FIELDS = {"project": "project", "datasource": "name", "operation": "operation"}
_REQUEST_FIELDS = ("error_code", "path")


def datasource_context(record: logging.LogRecord) -> dict[str, str]:
    """Collect the datasource keys a record was logged with."""
    context = {}
    for attr, key in _DATASOURCE_FIELDS.items():
        value = getattr(record, attr, None)
        if value is not None:
            context[key] = value
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = datasource_context(record)
        if context:
            log["datasource"] = context
        for key in _REQUEST_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log[key] = value
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable lines with the datasource context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = datasource_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v!r}" for k, v in context.items())
        return f"{line} [{pairs}]"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure the root logger for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
