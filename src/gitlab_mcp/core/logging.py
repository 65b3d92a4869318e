import logging
import os
import re
import sys
from typing import Any, Optional, Sequence

LOG_LEVEL_ENV = "GITLAB_MCP_LOG_LEVEL"

# Attributes picked off each record when present; nothing else is printed.
LOG_EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "endpoint",
    "status",
    "duration_ms",
    "tool",
    "error_type",
)

# httpx logs every request line at INFO; ours are already in op_call.
NOISY_LOGGERS = ("httpx", "httpcore")

_NEEDS_QUOTES = re.compile(r'[\s="]')


def logfmt_value(val: Any) -> str:
    if isinstance(val, (bool, int, float)):
        return str(val)
    text = str(val)
    if not text or _NEEDS_QUOTES.search(text):
        return '"' + text.replace('"', '\\"') + '"'
    return text


class LogfmtFormatter(logging.Formatter):
    """
    One `key=value` line per record: level, logger, event (the message),
    then whichever of `fields` the record carries.
    """

    def __init__(self, fields: Sequence[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        parts = [f"level={record.levelname.lower()}", f"logger={record.name}"]

        msg = record.getMessage()
        if msg:
            parts.append(f"event={logfmt_value(msg)}")

        parts.extend(
            f"{key}={logfmt_value(getattr(record, key))}"
            for key in self.fields
            if getattr(record, key, None) is not None
        )

        if record.exc_info and record.exc_info[0] is not None:
            parts.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(parts)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Route all logging to stderr in logfmt. stdout belongs to the stdio
    transport's JSON-RPC stream. Level defaults to GITLAB_MCP_LOG_LEVEL, then INFO.
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = [
    "setup_logging",
    "LogfmtFormatter",
    "LOG_EXTRA_FIELDS",
    "LOG_LEVEL_ENV",
    "logfmt_value",
]
