"""Protocols and naming tools for video-store resources.

A video store is a *named resource* of the ``viam-modules:service:videostore``
API. Rather than inheriting from a framework base class, implementations
satisfy the :py:class:`Resource` capability set (identity and lifecycle) and the
:py:class:`VideoStore` operations. Both the remote client
(:py:class:`videostore.client.VideoStoreClient`) and local implementations
served by :py:class:`videostore.service.VideostoreService` conform.
"""

from __future__ import annotations

__all__ = (
    "API",
    "ChunkCallback",
    "Resource",
    "ResourceAPI",
    "ResourceName",
    "VideoStore",
    "named",
)

import dataclasses
import logging
import typing

from videostore.exceptions import APIError

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))

ChunkCallback = typing.Callable[[bytes], typing.Optional[typing.Awaitable[None]]]
"""Receives each streamed chunk. May return an awaitable, which is awaited."""


@dataclasses.dataclass(frozen=True)
class ResourceAPI:
    """The namespace:type:subtype triplet identifying a resource API."""

    namespace: str
    resource_type: str
    subtype: str

    def __str__(self) -> str:
        return f"{self.namespace}:{self.resource_type}:{self.subtype}"

    @classmethod
    def parse(cls, text: str) -> ResourceAPI:
        parts = text.split(":")
        if len(parts) != 3 or not all(parts):
            raise APIError(f"Expected <namespace>:<type>:<subtype>. Got {repr(text)}.")
        return cls(*parts)


API = ResourceAPI(namespace="viam-modules", resource_type="service", subtype="videostore")


@dataclasses.dataclass(frozen=True)
class ResourceName:
    """Fully qualified name of a resource.

    *remote* is a colon-delimited chain of remote robot names, outermost first.
    The *short_name* (``remote:name``, or just ``name``) is what gets sent in
    request messages.
    """

    api: ResourceAPI
    name: str
    remote: str = ""

    def __post_init__(self):
        if not self.name:
            raise APIError("Resource name must not be empty.")

    @property
    def short_name(self) -> str:
        if self.remote:
            return f"{self.remote}:{self.name}"
        return self.name

    def prepend_remote(self, remote: str) -> ResourceName:
        """Get a new name that is reached through *remote*.

        An empty *remote* returns the name unchanged.
        """
        if not remote:
            return self
        if self.remote:
            remote = f"{remote}:{self.remote}"
        return dataclasses.replace(self, remote=remote)

    def __str__(self) -> str:
        return f"{self.api}/{self.short_name}"

    @classmethod
    def parse(cls, text: str) -> ResourceName:
        """Parse the ``<api>/<short name>`` string form."""
        api, sep, short_name = text.partition("/")
        if not sep:
            raise APIError(f"Expected <api>/<name>. Got {repr(text)}.")
        remote, _, name = short_name.rpartition(":")
        return cls(api=ResourceAPI.parse(api), name=name, remote=remote)


def named(name: str) -> ResourceName:
    """Get the typed resource name of the named video store."""
    return ResourceName(api=API, name=name)


@typing.runtime_checkable
class Resource(typing.Protocol):
    """Capability set shared by all resources: identity and lifecycle."""

    @property
    def name(self) -> ResourceName:
        ...

    async def close(self) -> None:
        ...

    async def do_command(self, command: typing.Mapping[str, typing.Any]) -> typing.Dict[str, typing.Any]:
        ...


@typing.runtime_checkable
class VideoStore(Resource, typing.Protocol):
    """Operations on a stored video range.

    *from_* and *to* are timestamps in the form understood by the server
    (see :py:mod:`videostore.timestamps`). *container* names the output
    container format. None of the arguments are checked by clients.
    """

    async def fetch(self, from_: str, to: str, container: str = "") -> bytes:
        ...

    async def save(
        self, from_: str, to: str, container: str = "", metadata: str = "", async_: bool = False
    ) -> str:
        ...

    async def fetch_stream(self, from_: str, to: str, container: str, on_chunk: ChunkCallback) -> None:
        ...
