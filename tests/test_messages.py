"""Test the wire schema loaded in videostore._grpc."""
import pathlib

from google.protobuf.descriptor import FieldDescriptor

from videostore import _grpc
from videostore._grpc import FetchStreamRequest

_STRING = FieldDescriptor.TYPE_STRING
_BYTES = FieldDescriptor.TYPE_BYTES
_BOOL = FieldDescriptor.TYPE_BOOL
_MESSAGE = FieldDescriptor.TYPE_MESSAGE

_RANGE_REQUEST = {
    "name": (1, _STRING),
    "from": (2, _STRING),
    "to": (3, _STRING),
    "container": (4, _STRING),
    "request_id": (5, _STRING),
}

# The wire contract of the videostore service, by message.
EXPECTED_FIELDS = {
    "FetchRequest": _RANGE_REQUEST,
    "FetchResponse": {"video_data": (1, _BYTES), "request_id": (2, _STRING)},
    "SaveRequest": {
        "name": (1, _STRING),
        "from": (2, _STRING),
        "to": (3, _STRING),
        "container": (4, _STRING),
        "metadata": (5, _STRING),
        "async": (6, _BOOL),
        "request_id": (7, _STRING),
    },
    "SaveResponse": {"filename": (1, _STRING), "request_id": (2, _STRING)},
    "FetchStreamRequest": _RANGE_REQUEST,
    "FetchStreamResponse": {"video_data": (1, _BYTES), "request_id": (2, _STRING)},
    "DoCommandRequest": {"name": (1, _STRING), "command": (2, _MESSAGE)},
    "DoCommandResponse": {"result": (1, _MESSAGE)},
}


def test_descriptor_comes_from_shipped_proto():
    assert _grpc.DESCRIPTOR.name == "videostore/_grpc/videostore.proto"
    assert _grpc.DESCRIPTOR.package == "viammodules.service.videostore.v1"
    assert (pathlib.Path(_grpc.__file__).parent / "videostore.proto").is_file()


def test_service_descriptor():
    service = _grpc.DESCRIPTOR.services_by_name["VideostoreService"]
    assert service.full_name == _grpc.SERVICE_NAME == "viammodules.service.videostore.v1.VideostoreService"
    methods = {method.name: method for method in service.methods}
    assert set(methods) == {"Fetch", "Save", "FetchStream", "DoCommand"}
    assert methods["Fetch"].input_type.name == "FetchRequest"
    assert methods["FetchStream"].output_type.name == "FetchStreamResponse"
    assert methods["FetchStream"].server_streaming
    assert not methods["Fetch"].server_streaming


def test_message_fields():
    assert set(_grpc.DESCRIPTOR.message_types_by_name) == set(EXPECTED_FIELDS)
    for message_name, expected in EXPECTED_FIELDS.items():
        message_class = getattr(_grpc, message_name)
        fields = {field.name: (field.number, field.type) for field in message_class.DESCRIPTOR.fields}
        assert fields == expected, message_name


def test_struct_fields():
    for message_name, field_name in (("DoCommandRequest", "command"), ("DoCommandResponse", "result")):
        field = getattr(_grpc, message_name).DESCRIPTOR.fields_by_name[field_name]
        assert field.message_type.full_name == "google.protobuf.Struct"


def test_keyword_fields():
    request = FetchStreamRequest(name="vs-1", to="b", **{"from": "a"})
    assert getattr(request, "from") == "a"
    # Known encoding: field 1 "vs-1", field 2 "a", field 3 "b".
    assert request.SerializeToString() == b"\n\x04vs-1\x12\x01a\x1a\x01b"
