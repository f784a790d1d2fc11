"""gRPC details for the videostore service.

The wire schema is ``videostore.proto``, shipped alongside this module. The
message classes and service helpers are generated from it at import time by
:py:func:`grpc.protos_and_services` (``grpcio-tools``), so the ``.proto`` file
is the only definition of the schema.
"""

__all__ = (
    "DESCRIPTOR",
    "SERVICE_NAME",
    "DoCommandRequest",
    "DoCommandResponse",
    "FetchRequest",
    "FetchResponse",
    "FetchStreamRequest",
    "FetchStreamResponse",
    "SaveRequest",
    "SaveResponse",
    "VideostoreServiceServicer",
    "VideostoreServiceStub",
    "add_VideostoreServiceServicer_to_server",
)

import logging

import grpc

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))

# Resolved against sys.path, like an import.
PROTO_PATH = "videostore/_grpc/videostore.proto"

_protos, _services = grpc.protos_and_services(PROTO_PATH)

DESCRIPTOR = _protos.DESCRIPTOR
SERVICE_NAME = DESCRIPTOR.services_by_name["VideostoreService"].full_name

FetchRequest = _protos.FetchRequest
FetchResponse = _protos.FetchResponse
SaveRequest = _protos.SaveRequest
SaveResponse = _protos.SaveResponse
FetchStreamRequest = _protos.FetchStreamRequest
FetchStreamResponse = _protos.FetchStreamResponse
DoCommandRequest = _protos.DoCommandRequest
DoCommandResponse = _protos.DoCommandResponse

VideostoreServiceStub = _services.VideostoreServiceStub
VideostoreServiceServicer = _services.VideostoreServiceServicer
add_VideostoreServiceServicer_to_server = _services.add_VideostoreServiceServicer_to_server
