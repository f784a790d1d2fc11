"""Serve video-store resources over gRPC.

:py:class:`VideostoreService` receives ``VideostoreService`` RPCs and
dispatches them by resource name to objects implementing
:py:class:`videostore.resource.VideoStore`.

Note: Errors raised by a resource are not translated. The gRPC runtime reports
them to the caller with status ``UNKNOWN``.
"""

from __future__ import annotations

__all__ = ("VideostoreService", "create_server")

import logging
import typing

import grpc
from google.protobuf import json_format

from videostore._grpc import add_VideostoreServiceServicer_to_server
from videostore._grpc import DoCommandResponse
from videostore._grpc import FetchResponse
from videostore._grpc import FetchStreamResponse
from videostore._grpc import SaveResponse
from videostore._grpc import VideostoreServiceServicer
from videostore.exceptions import APIError
from videostore.resource import VideoStore

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class VideostoreService(VideostoreServiceServicer):
    """Service the messages received over the RPC channel.

    *resources* maps each resource's short name to its implementation. The
    mapping is read at each request, so callers may add or remove resources
    while the server runs.

    Must be served by a :py:mod:`grpc.aio` server.
    """

    def __init__(self, resources: typing.Mapping[str, VideoStore]):
        self._resources = resources

    async def _resource(self, name: str, context: grpc.aio.ServicerContext) -> VideoStore:
        try:
            return self._resources[name]
        except KeyError:
            # abort() raises, ending the RPC.
            await context.abort(grpc.StatusCode.NOT_FOUND, f"No videostore resource named {repr(name)}.")

    async def Fetch(self, request, context: grpc.aio.ServicerContext):
        logger.debug(f"Received Fetch request: {request.request_id} for {request.name}")
        store = await self._resource(request.name, context)
        data = await store.fetch(getattr(request, "from"), request.to, request.container)
        return FetchResponse(video_data=data, request_id=request.request_id)

    async def Save(self, request, context: grpc.aio.ServicerContext):
        logger.debug(f"Received Save request: {request.request_id} for {request.name}")
        store = await self._resource(request.name, context)
        filename = await store.save(
            getattr(request, "from"),
            request.to,
            request.container,
            request.metadata,
            getattr(request, "async"),
        )
        return SaveResponse(filename=filename, request_id=request.request_id)

    async def FetchStream(self, request, context: grpc.aio.ServicerContext):
        """Relay chunks from the resource to the caller as they are produced."""
        logger.debug(f"Received FetchStream request: {request.request_id} for {request.name}")
        store = await self._resource(request.name, context)

        async def send(chunk: bytes):
            await context.write(FetchStreamResponse(video_data=chunk, request_id=request.request_id))

        await store.fetch_stream(getattr(request, "from"), request.to, request.container, send)

    async def DoCommand(self, request, context: grpc.aio.ServicerContext):
        logger.debug(f"Received DoCommand request for {request.name}")
        store = await self._resource(request.name, context)
        result = await store.do_command(json_format.MessageToDict(request.command))
        response = DoCommandResponse()
        response.result.update(result)
        return response


def create_server(
    resources: typing.Mapping[str, VideoStore], address: str = "[::]:0"
) -> typing.Tuple[grpc.aio.Server, int]:
    """Build a server for *resources* listening (insecurely) on *address*.

    Must be called with a running event loop. The caller starts and stops the
    server.

    Returns:
        The server and the bound port (useful when *address* requests port 0).
    """
    server = grpc.aio.server()
    add_VideostoreServiceServicer_to_server(VideostoreService(resources), server)
    port = server.add_insecure_port(address)
    if port == 0:
        raise APIError(f"Could not bind {address}.")
    logger.debug(f"Videostore server bound to port {port}.")
    return server, port
