"""videostore - client binding for the viam-modules videostore service.

Fetch, save, and stream ranges of stored video from a remote video store
over gRPC. The main entry point is :py:class:`videostore.client.VideoStoreClient`.
:py:class:`videostore.service.VideostoreService` serves local video stores
with the same interface.
"""

__all__ = (
    "API",
    "ClientOptions",
    "ResourceName",
    "VideoStore",
    "VideoStoreClient",
    "VideoStoreError",
    "named",
    "__version__",
)

from .logger import logger as _logger  # noqa: F401 (install the NullHandler first)

from .client import ClientOptions
from .client import VideoStoreClient
from .exceptions import VideoStoreError
from .resource import API
from .resource import named
from .resource import ResourceName
from .resource import VideoStore

__version__ = "0.1.0"
