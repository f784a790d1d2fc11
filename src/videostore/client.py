"""Client binding for a remote video store.

:py:class:`VideoStoreClient` translates the video-store operations into
requests on the ``VideostoreService`` gRPC API and relays the responses.
The channel is supplied by the caller (it owns transport setup, credentials and
connection lifecycle). The client performs no validation, retries or caching:
transport and server errors reach the caller unchanged as
:py:class:`grpc.aio.AioRpcError`.

Example::

    async with grpc.aio.insecure_channel("localhost:8080") as channel:
        store = VideoStoreClient(channel, "vs-1")
        data = await store.fetch("2024-09-06_15-00-00", "2024-09-06_15-00-30", "mp4")

"""

from __future__ import annotations

__all__ = ("ClientOptions", "VideoStoreClient")

import dataclasses
import inspect
import logging
import typing
import uuid

from videostore._grpc import FetchRequest
from videostore._grpc import FetchStreamRequest
from videostore._grpc import SaveRequest
from videostore._grpc import VideostoreServiceStub
from videostore.exceptions import APIError
from videostore.resource import ChunkCallback
from videostore.resource import named
from videostore.resource import ResourceName

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class _BinaryWriter(typing.Protocol):
    def write(self, data: bytes) -> typing.Any:
        ...


@dataclasses.dataclass(frozen=True)
class ClientOptions:
    """Per-client configuration, fixed at construction."""

    request_logger: typing.Optional[typing.Callable[[typing.Any], None]] = None
    """Diagnostic hook.

    Called with every outgoing request message before the call is awaited, and
    with the exception when a streaming call fails. The return value is ignored,
    and exceptions it raises are logged and suppressed.
    """

    timeout: typing.Optional[float] = None
    """Deadline in seconds (positive) passed to the transport for each call. None for no deadline."""

    def __post_init__(self):
        if self.request_logger is not None and not callable(self.request_logger):
            raise APIError(f"request_logger must be callable. Got {repr(self.request_logger)}.")
        if self.timeout is not None and self.timeout <= 0:
            raise APIError(f"timeout must be positive. Got {self.timeout}.")


def _request_id() -> str:
    return str(uuid.uuid4())


class VideoStoreClient:
    """A video store reached through a gRPC channel.

    Arguments:
        channel: a :py:mod:`grpc.aio` channel to the server hosting the resource.
        name: the resource name, or its plain string name.
        options: optional :py:class:`ClientOptions`.
        remote_name: name of the remote through which the resource is reached, if any.

    The short name of the resource (including any remote prefix) is sent with
    each request.
    """

    def __init__(
        self,
        channel,
        name: typing.Union[str, ResourceName],
        options: ClientOptions = None,
        *,
        remote_name: str = "",
    ):
        if isinstance(name, str):
            name = named(name)
        self._name = name.prepend_remote(remote_name)
        self._options = options if options is not None else ClientOptions()
        self._stub = VideostoreServiceStub(channel)

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__} {self._name}>"

    @property
    def name(self) -> ResourceName:
        return self._name

    @property
    def options(self) -> ClientOptions:
        return self._options

    def _log_request(self, item):
        logger.debug(f"{self._name}: {type(item).__name__}")
        if self._options.request_logger is None:
            return
        try:
            self._options.request_logger(item)
        except Exception:
            # The hook is diagnostic only; its failures must not reach the caller.
            logger.exception(f"{self._name}: request_logger raised while handling {type(item).__name__}.")

    async def fetch(self, from_: str, to: str, container: str = "") -> bytes:
        """Get the encoded video between *from_* and *to*."""
        request = FetchRequest(
            name=self._name.short_name, to=to, container=container, request_id=_request_id(), **{"from": from_}
        )
        self._log_request(request)
        response = await self._stub.Fetch(request, timeout=self._options.timeout)
        return response.video_data

    async def save(
        self, from_: str, to: str, container: str = "", metadata: str = "", async_: bool = False
    ) -> str:
        """Ask the server to persist the range to a file.

        Returns the filename reported by the server. With *async_*, the server
        may return the name before the file is complete.
        """
        request = SaveRequest(
            name=self._name.short_name,
            to=to,
            container=container,
            metadata=metadata,
            request_id=_request_id(),
            **{"from": from_, "async": async_},
        )
        self._log_request(request)
        response = await self._stub.Save(request, timeout=self._options.timeout)
        return response.filename

    async def fetch_stream(self, from_: str, to: str, container: str, on_chunk: ChunkCallback) -> None:
        """Stream the range, passing each chunk to *on_chunk* in arrival order.

        If *on_chunk* returns an awaitable, it is awaited before the next chunk
        is read. On any error (from the stream or from *on_chunk*) the call is
        cancelled, the error is passed to the request logger and then re-raised. Chunks already delivered are not
        recalled.
        """
        if not callable(on_chunk):
            raise APIError(f"on_chunk must be callable. Got {repr(on_chunk)}.")
        request = FetchStreamRequest(
            name=self._name.short_name, to=to, container=container, request_id=_request_id(), **{"from": from_}
        )
        self._log_request(request)
        count = 0
        call = self._stub.FetchStream(request, timeout=self._options.timeout)
        try:
            async for response in call:
                result = on_chunk(response.video_data)
                if inspect.isawaitable(result):
                    await result
                count += 1
        except Exception as e:
            logger.error(f"{self._name}: FetchStream failed after {count} chunk(s): {e!r}")
            # Leaving the loop early does not close the call; stop the server from sending more.
            call.cancel()
            self._log_request(e)
            raise
        logger.debug(f"{self._name}: FetchStream finished after {count} chunk(s).")

    async def fetch_stream_to(self, from_: str, to: str, container: str, writer: _BinaryWriter) -> int:
        """Stream the range into a binary file-like *writer*.

        Returns the number of bytes written.
        """
        written = 0

        def write(chunk: bytes):
            nonlocal written
            writer.write(chunk)
            written += len(chunk)

        await self.fetch_stream(from_, to, container, write)
        return written

    async def do_command(self, command: typing.Mapping[str, typing.Any]) -> typing.Dict[str, typing.Any]:
        """Extension point for vendor-specific commands.

        Not forwarded to the server: always returns an empty result.
        """
        return {}

    async def close(self) -> None:
        """The channel belongs to the caller, so there is nothing to release."""
