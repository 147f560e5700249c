"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All JSON logs include time, level (lowercase), logger, msg, version
    - Extra fields (user_id, error_code, path, method) surfaced when present
    - caller (file:line) only when enabled; exception text only when stack traces are enabled
    - Unknown level names fall back to INFO
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = ("user_id", "error_code", "path", "method", "addr")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def __init__(
        self, version: str = "not_specified", caller: bool = False,
        stack_trace: bool = False,
    ):
        super().__init__()
        self.version = version
        self.caller = caller
        self.stack_trace = stack_trace

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
            "version": self.version,
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = str(val)
        if self.caller:
            log["caller"] = f"{record.pathname}:{record.lineno}"
        if record.exc_info and self.stack_trace:
            log["exception"] = self.formatException(record.exc_info)
        elif record.exc_info and record.exc_info[1] is not None:
            log["error"] = str(record.exc_info[1])
        return json.dumps(log, ensure_ascii=False)


def setup_logging(
    level: str = "info",
    fmt: str = "json",
    caller: bool = False,
    stack_trace: bool = False,
    version: str = "not_specified",
) -> logging.Handler:
    """Configure the root logger; replaces a handler installed by a previous call."""
    handler = logging.StreamHandler()
    handler.set_name("user_service")
    if fmt == "json":
        handler.setFormatter(JSONFormatter(version, caller, stack_trace))
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == "user_service":
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
