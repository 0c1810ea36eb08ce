"""
Logging setup for the API process and the seeder.

Log lines carry the ID of the HTTP request that produced them. The ID lives
in ``request_id_var``, which the request-id middleware sets per request;
records emitted outside a request show ``-``.
"""

from __future__ import annotations

import contextvars
import logging
import os
import sys
from typing import Optional

from .constants import DEFAULT_LOG_LEVEL, LOG_FORMAT

PLAIN_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default="-"
)


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    include_request_id: bool = True,
) -> None:
    """
    Route all log output to stdout with one shared format.

    Args:
        level: Level name; falls back to ``LOG_LEVEL`` and then INFO.
        format_string: Format override.
        include_request_id: Use the request-tagged format (off for the seeder).
    """
    level_name = (level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    if format_string is None:
        format_string = LOG_FORMAT if include_request_id else PLAIN_LOG_FORMAT

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=format_string,
        handlers=[handler],
        force=True,
    )

    # uvicorn's access log duplicates the request-id middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Log level set to {level_name}")


class RequestIDFilter(logging.Filter):
    """Stamp each record with the current request ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True
