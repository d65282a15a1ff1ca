"""Booking ID correlation for log output.

Every record that passes through the console handler is stamped with the
display ID of the booking being processed, so one submission can be
followed from persistence to dispatch. Outside a booking the ID reads
``NO_BOOKING_ID``.

Usage:
    with booking_scope("1760659200000"):
        logger.info("Dispatching")
    # ... [booking=1760659200000] Dispatching
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional, TextIO

NO_BOOKING_ID = "NO_BOOKING_ID"

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [booking=%(booking_id)s]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_booking_id: ContextVar[str] = ContextVar("booking_id", default=NO_BOOKING_ID)


def set_booking_id(booking_id: str) -> Token:
    """Bind a booking ID to the current context; pass the token to ``reset_booking_id``."""
    return _booking_id.set(booking_id)


def reset_booking_id(token: Token) -> None:
    _booking_id.reset(token)


def get_booking_id() -> str:
    return _booking_id.get()


@contextmanager
def booking_scope(booking_id: str) -> Iterator[str]:
    """Tag log records with ``booking_id`` until the block exits."""
    token = set_booking_id(booking_id)
    try:
        yield booking_id
    finally:
        reset_booking_id(token)


class BookingIdFilter(logging.Filter):
    """Adds ``booking_id`` to records so ``LOG_FORMAT`` can render it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "booking_id"):
            record.booking_id = _booking_id.get()  # type: ignore[attr-defined]
        return True


def make_log_handler(stream: Optional[TextIO] = None) -> logging.Handler:
    """Stream handler that renders the booking ID on every line.

    The filter sits on the handler rather than on individual loggers, so
    records from any library that propagate to it are stamped too.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(BookingIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def get_booking_logger(name: str) -> logging.Logger:
    """Logger whose records carry ``booking_id`` even under foreign handlers."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, BookingIdFilter) for f in logger.filters):
        logger.addFilter(BookingIdFilter())
    return logger
