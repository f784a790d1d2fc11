"""Timestamp helpers for the video-store datetime format.

The service identifies video ranges with local-style timestamps of the form
``2024-09-06_15-00-33``. Clients pass timestamp strings through without
checking them, so these helpers are a convenience for callers that start from
:py:class:`datetime.datetime` objects.
"""

__all__ = ("DATETIME_FORMAT", "format_datetime", "parse_datetime", "time_range")

import datetime
import logging
import typing

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))

DATETIME_FORMAT = "%Y-%m-%d_%H-%M-%S"


def format_datetime(value: datetime.datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def parse_datetime(text: str) -> datetime.datetime:
    """Parse a video-store timestamp.

    Raises:
        ValueError: if *text* does not match :py:data:`DATETIME_FORMAT`.
    """
    return datetime.datetime.strptime(text, DATETIME_FORMAT)


def time_range(seconds: float, end: datetime.datetime = None) -> typing.Tuple[str, str]:
    """Get the (from, to) timestamps for the *seconds* leading up to *end*.

    *end* defaults to the current UTC time.
    """
    if seconds < 0:
        raise ValueError(f"Expected a non-negative duration. Got {seconds}.")
    if end is None:
        end = datetime.datetime.now(tz=datetime.timezone.utc)
    start = end - datetime.timedelta(seconds=seconds)
    return format_datetime(start), format_datetime(end)
