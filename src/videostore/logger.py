"""The ``videostore`` package logger.

A :py:class:`logging.NullHandler` is attached on import, so an application
that configures no logging sees no output from this package. To see client
and servicer activity, attach a handler to the ``videostore`` logger, or use
``python -m videostore --log-level DEBUG`` (see
:py:func:`videostore.invocation.configure_logging`).
"""

__all__ = ["logger"]

from logging import getLogger
from logging import NullHandler

logger = getLogger("videostore")
logger.addHandler(NullHandler())
