"""Exceptions thrown by videostore are catchable as videostore.VideoStoreError.

Errors reported by the remote service are *not* wrapped: they reach the caller
as the :py:class:`grpc.aio.AioRpcError` raised by the transport.
"""

__all__ = ("VideoStoreError", "APIError", "ConfigurationError")

import logging as _logging

logger = _logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class VideoStoreError(Exception):
    """Base exception for videostore package errors.

    Users should be able to use this base class to catch errors
    emitted by the videostore package itself.
    """


class APIError(VideoStoreError):
    """Specified interfaces are being violated."""


class ConfigurationError(VideoStoreError):
    """The requested configuration is incomplete or inconsistent."""
