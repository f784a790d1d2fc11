"""Configuration for pytest tests.

Integration fixtures run an in-process :py:mod:`grpc.aio` server that serves
:py:class:`MemoryVideoStore` resources through
:py:class:`videostore.service.VideostoreService`. No external service is
required.
"""
import asyncio
import inspect
import logging

import grpc
import pytest
import pytest_asyncio

import videostore
from videostore.service import create_server

logger = logging.getLogger("pytest_config")
logger.setLevel(logging.DEBUG)

# Twelve bytes that are easy to recognize in assertion output.
SAMPLE_VIDEO = b"\x00\x00\x00\x18ftypmp42"


class MemoryVideoStore:
    """A video store holding one clip in memory.

    *fail_after* makes ``fetch_stream`` raise after delivering that many chunks.
    """

    def __init__(self, name: str, video: bytes, chunk_size: int = 4, fail_after: int = None):
        self._name = videostore.named(name)
        self.video = video
        self.chunk_size = chunk_size
        self.fail_after = fail_after
        self.requests = []

    @property
    def name(self):
        return self._name

    async def fetch(self, from_, to, container=""):
        self.requests.append(("fetch", from_, to, container))
        return self.video

    async def save(self, from_, to, container="", metadata="", async_=False):
        self.requests.append(("save", from_, to, container, metadata, async_))
        return f"{self._name.name}_{from_}.{container or 'mp4'}"

    async def fetch_stream(self, from_, to, container, on_chunk):
        self.requests.append(("fetch_stream", from_, to, container))
        for index, offset in enumerate(range(0, len(self.video), self.chunk_size)):
            if self.fail_after is not None and index == self.fail_after:
                raise RuntimeError("segment unavailable")
            result = on_chunk(self.video[offset : offset + self.chunk_size])
            if inspect.isawaitable(result):
                await result

    async def do_command(self, command):
        return {"echo": dict(command)}

    async def close(self):
        pass


class EndlessVideoStore(MemoryVideoStore):
    """A video store whose stream never ends on its own.

    ``stopped`` is set once ``fetch_stream`` exits, for example because the
    caller cancelled the RPC.
    """

    def __init__(self, name: str):
        super().__init__(name, SAMPLE_VIDEO)
        self.stopped = None

    async def fetch_stream(self, from_, to, container, on_chunk):
        self.requests.append(("fetch_stream", from_, to, container))
        self.stopped = asyncio.Event()
        try:
            while True:
                result = on_chunk(self.video)
                if inspect.isawaitable(result):
                    await result
                await asyncio.sleep(0.01)
        finally:
            self.stopped.set()


@pytest.fixture
def memory_store():
    return MemoryVideoStore("vs-1", SAMPLE_VIDEO)


@pytest.fixture
def failing_store():
    return MemoryVideoStore("flaky", SAMPLE_VIDEO, fail_after=1)


@pytest.fixture
def endless_store():
    return EndlessVideoStore("endless")


@pytest_asyncio.fixture
async def videostore_address(memory_store, failing_store, endless_store):
    """Start a server for the memory stores and provide its address."""
    resources = {"vs-1": memory_store, "flaky": failing_store, "endless": endless_store, "robot-2:vs-1": memory_store}
    server, port = create_server(resources, "127.0.0.1:0")
    await server.start()
    logger.debug(f"Started test server on port {port}")
    try:
        yield f"127.0.0.1:{port}"
    finally:
        await server.stop(None)


@pytest_asyncio.fixture
async def channel(videostore_address):
    async with grpc.aio.insecure_channel(videostore_address) as _channel:
        yield _channel
