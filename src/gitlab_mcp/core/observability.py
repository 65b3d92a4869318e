from __future__ import annotations

import logging
from typing import Any, Dict

OBSERVABILITY_LOGGER = "gitlab_mcp.observability"

# LogRecord attributes; passing any of these through `extra` raises KeyError.
RESERVED_LOG_KEYS = {
    "name",
    "msg",
    "message",
    "args",
    "asctime",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """
    Emit one structured event at INFO.
    Fields travel as `extra` so LogfmtFormatter can print them.
    """
    log = logger or logging.getLogger(OBSERVABILITY_LOGGER)
    extra = {"event": event, **_clean_fields(fields)}
    log.info(event, extra=extra)


__all__ = ["log_event", "OBSERVABILITY_LOGGER"]
