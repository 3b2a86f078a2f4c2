from __future__ import annotations

import logging

LINE_WIDTH = 19
PAD_CHAR = " "

logger = logging.getLogger(__name__)


def pad_line(payload: str, width: int = LINE_WIDTH, warn: bool = True) -> bytes:
    """
    Right-pad a payload with spaces and encode it as ASCII.

    Payloads longer than ``width`` are passed through unmodified.
    Characters outside ASCII are replaced with ``?``.
    """
    if len(payload) > width and warn:
        logger.warning("line_too_long", extra={"details": {"payload": payload, "width": width}})
    return payload.ljust(width, PAD_CHAR).encode("ascii", errors="replace")


def format_number(value: int | float | bool) -> str:
    """
    >>> format_number(15.7)
    '15.7'
    >>> format_number(16.0)
    '16'
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_flag(value: bool) -> str:
    return "1" if value else "0"


def to_device_minutes(minutes: int) -> int:
    """
    Convert a wanted remaining time in minutes to the value the controller expects.

    The controller always displays minutes rounded up, so 1:30 has to be sent as 2,30.
    """
    return minutes + 1


def from_device_minutes(minutes: int) -> int:
    """Convert a reported minute count back to whole minutes left, never below zero."""
    return minutes - 1 if minutes > 0 else minutes
