"""Request-scoped log correlation for slot lookups.

Each booking-page lookup (or CLI invocation) runs inside a
``request_scope``. The handler installed by ``configure_logging`` stamps
every record with the active request ID and renders it in the line
prefix, so the trainer skip reasons and slot totals of one lookup can be
grepped out of interleaved output.

Usage:
    from nexus_booking.logging_context import new_request_id, request_scope

    with request_scope(new_request_id("WEB")):
        generate_available_slots(...)   # lines read "[WEB-3F9A1C] ..."
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional, TextIO

NO_REQUEST = "-"
LOG_FORMAT = "%(asctime)s [%(request_id)s] [%(name)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST)


def new_request_id(prefix: str = "REQ") -> str:
    """Short upper-case correlation ID such as ``REQ-3F9A1C``."""
    return f"{prefix}-{uuid.uuid4().hex[:6].upper()}"


def get_request_id() -> str:
    return _request_id.get()


@contextmanager
def request_scope(request_id: str) -> Iterator[str]:
    """Bind ``request_id`` for the duration of the block, then restore the previous one."""
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the active request ID on records passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Install the request-aware handler on the root logger.

    Calling it again replaces the handler it installed before, so the
    level or target stream can be changed at runtime. Handlers installed
    by other code are left alone.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, _RequestHandler):
            root.removeHandler(existing)

    handler = _RequestHandler(stream if stream is not None else sys.stderr)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


class _RequestHandler(logging.StreamHandler):
    """Marker type so configure_logging can find its own handler."""
