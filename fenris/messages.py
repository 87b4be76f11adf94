"""Request and response messages with a protobuf-compatible wire encoding."""

from __future__ import annotations

import base64
import enum
import json
from dataclasses import dataclass, field
from typing import Iterator, Union

__all__ = [
    "RequestType",
    "ResponseType",
    "FileInfo",
    "DirectoryListing",
    "Request",
    "Response",
    "serialize_request",
    "deserialize_request",
    "request_to_json",
    "serialize_response",
    "deserialize_response",
    "response_to_json",
]


class RequestType(enum.IntEnum):
    PING = 0
    READ_FILE = 1
    WRITE_FILE = 2
    APPEND_FILE = 3
    DELETE_FILE = 4
    INFO_FILE = 5
    CREATE_DIR = 6
    LIST_DIR = 7
    CHANGE_DIR = 8
    DELETE_DIR = 9
    TERMINATE = 10


class ResponseType(enum.IntEnum):
    PONG = 0
    SUCCESS = 1
    ERROR = 2
    FILE_INFO = 3
    FILE_CONTENT = 4
    DIR_LISTING = 5
    TERMINATED = 6


@dataclass
class FileInfo:
    name: str = ""
    size: int = 0
    is_directory: bool = False
    modified_time: int = 0
    permissions: int = 0


@dataclass
class DirectoryListing:
    entries: list[FileInfo] = field(default_factory=list)


@dataclass
class Request:
    command: Union[RequestType, int] = RequestType.PING
    filename: str = ""
    ip_addr: int = 0
    data: bytes = b""


@dataclass
class Response:
    type: Union[ResponseType, int] = ResponseType.PONG
    success: bool = False
    error_message: str = ""
    data: bytes = b""
    file_info: FileInfo | None = None
    directory_listing: DirectoryListing | None = None


_VARINT = 0
_FIXED64 = 1
_LEN = 2
_FIXED32 = 5

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
_MAX_FIELD_NUMBER = (1 << 29) - 1


class _DecodeError(ValueError):
    """Malformed wire data."""


# --- encoding -------------------------------------------------------------


def _encode_varint(value: int) -> bytes:
    value &= _MASK64
    out = bytearray()
    while True:
        bits = value & 0x7F
        value >>= 7
        if value:
            out.append(bits | 0x80)
        else:
            out.append(bits)
            return bytes(out)


def _key(number: int, wire: int) -> bytes:
    return _encode_varint(number << 3 | wire)


def _varint_field(number: int, value: int) -> bytes:
    return _key(number, _VARINT) + _encode_varint(value) if value else b""


def _bytes_field(number: int, value: bytes) -> bytes:
    if not value:
        return b""
    return _key(number, _LEN) + _encode_varint(len(value)) + value


def _message_field(number: int, payload: bytes) -> bytes:
    return _key(number, _LEN) + _encode_varint(len(payload)) + payload


def _encode_file_info(info: FileInfo) -> bytes:
    return b"".join(
        (
            _bytes_field(1, info.name.encode("utf-8")),
            _varint_field(2, info.size),
            _varint_field(3, int(info.is_directory)),
            _varint_field(4, info.modified_time),
            _varint_field(5, info.permissions & _MASK32),
        )
    )


def _encode_directory_listing(listing: DirectoryListing) -> bytes:
    return b"".join(_message_field(1, _encode_file_info(entry)) for entry in listing.entries)


# --- decoding -------------------------------------------------------------


def _read_varint(buf: bytes, pos: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if pos >= len(buf):
            raise _DecodeError("truncated varint")
        byte = buf[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result & _MASK64, pos
        shift += 7
        if shift >= 70:
            raise _DecodeError("varint too long")


def _take(buf: bytes, pos: int, length: int) -> tuple[bytes, int]:
    end = pos + length
    if end > len(buf):
        raise _DecodeError("truncated field")
    return buf[pos:end], end


def _iter_fields(buf: bytes) -> Iterator[tuple[int, int, Union[int, bytes]]]:
    pos = 0
    while pos < len(buf):
        key, pos = _read_varint(buf, pos)
        number, wire = key >> 3, key & 0x7
        if number == 0 or number > _MAX_FIELD_NUMBER:
            raise _DecodeError(f"invalid field number {number}")
        value: Union[int, bytes]
        if wire == _VARINT:
            value, pos = _read_varint(buf, pos)
        elif wire == _FIXED64:
            value, pos = _take(buf, pos, 8)
        elif wire == _LEN:
            length, pos = _read_varint(buf, pos)
            value, pos = _take(buf, pos, length)
        elif wire == _FIXED32:
            value, pos = _take(buf, pos, 4)
        else:
            raise _DecodeError(f"unsupported wire type {wire}")
        yield number, wire, value


def _as_int32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value >= 1 << 31 else value


def _as_enum(enum_cls, value: int):
    number = _as_int32(value)
    try:
        return enum_cls(number)
    except ValueError:
        return number


def _as_str(value: bytes) -> str:
    return value.decode("utf-8")


def _decode_file_info(buf: bytes) -> FileInfo:
    info = FileInfo()
    for number, wire, value in _iter_fields(buf):
        if number == 1 and wire == _LEN:
            info.name = _as_str(value)
        elif number == 2 and wire == _VARINT:
            info.size = value
        elif number == 3 and wire == _VARINT:
            info.is_directory = value != 0
        elif number == 4 and wire == _VARINT:
            info.modified_time = value
        elif number == 5 and wire == _VARINT:
            info.permissions = value & _MASK32
    return info


def _decode_directory_listing(buf: bytes) -> DirectoryListing:
    listing = DirectoryListing()
    for number, wire, value in _iter_fields(buf):
        if number == 1 and wire == _LEN:
            listing.entries.append(_decode_file_info(value))
    return listing


def _decode_request(buf: bytes) -> Request:
    request = Request()
    for number, wire, value in _iter_fields(buf):
        if number == 1 and wire == _VARINT:
            request.command = _as_enum(RequestType, value)
        elif number == 2 and wire == _LEN:
            request.filename = _as_str(value)
        elif number == 3 and wire == _VARINT:
            request.ip_addr = value & _MASK32
        elif number == 4 and wire == _LEN:
            request.data = bytes(value)
    return request


def _decode_response(buf: bytes) -> Response:
    response = Response()
    for number, wire, value in _iter_fields(buf):
        if number == 1 and wire == _VARINT:
            response.type = _as_enum(ResponseType, value)
        elif number == 2 and wire == _VARINT:
            response.success = value != 0
        elif number == 3 and wire == _LEN:
            response.error_message = _as_str(value)
        elif number == 4 and wire == _LEN:
            response.data = bytes(value)
        elif number == 5 and wire == _LEN:
            response.file_info = _decode_file_info(value)
        elif number == 6 and wire == _LEN:
            response.directory_listing = _decode_directory_listing(value)
    return response


# --- JSON -----------------------------------------------------------------


def _enum_json(value):
    return value.name if isinstance(value, enum.Enum) else value


def _bytes_json(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _file_info_json(info: FileInfo) -> dict:
    return {
        "name": info.name,
        "size": str(info.size),
        "isDirectory": info.is_directory,
        "modifiedTime": str(info.modified_time),
        "permissions": info.permissions,
    }


# --- public API -----------------------------------------------------------


def serialize_request(request: Request) -> bytes:
    """Encode a request in its wire format."""
    return b"".join(
        (
            _varint_field(1, int(request.command)),
            _bytes_field(2, request.filename.encode("utf-8")),
            _varint_field(3, request.ip_addr & _MASK32),
            _bytes_field(4, bytes(request.data)),
        )
    )


def deserialize_request(data: bytes) -> Request:
    """Decode a request; malformed input yields a default request."""
    try:
        return _decode_request(bytes(data))
    except ValueError:
        return Request()


def request_to_json(request: Request) -> str:
    """Render a request as indented JSON, including default-valued fields."""
    document = {
        "command": _enum_json(request.command),
        "filename": request.filename,
        "ipAddr": request.ip_addr,
        "data": _bytes_json(request.data),
    }
    return json.dumps(document, indent=1)


def serialize_response(response: Response) -> bytes:
    """Encode a response in its wire format."""
    parts = [
        _varint_field(1, int(response.type)),
        _varint_field(2, int(response.success)),
        _bytes_field(3, response.error_message.encode("utf-8")),
        _bytes_field(4, bytes(response.data)),
    ]
    if response.file_info is not None:
        parts.append(_message_field(5, _encode_file_info(response.file_info)))
    if response.directory_listing is not None:
        parts.append(_message_field(6, _encode_directory_listing(response.directory_listing)))
    return b"".join(parts)


def deserialize_response(data: bytes) -> Response:
    """Decode a response; malformed input yields a default response."""
    try:
        return _decode_response(bytes(data))
    except ValueError:
        return Response()


def response_to_json(response: Response) -> str:
    """Render a response as indented JSON, including default-valued fields."""
    document: dict = {
        "type": _enum_json(response.type),
        "success": response.success,
        "errorMessage": response.error_message,
        "data": _bytes_json(response.data),
    }
    if response.file_info is not None:
        document["fileInfo"] = _file_info_json(response.file_info)
    if response.directory_listing is not None:
        document["directoryListing"] = {
            "entries": [_file_info_json(entry) for entry in response.directory_listing.entries]
        }
    return json.dumps(document, indent=1)