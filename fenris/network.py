"""Length-prefixed message exchange over stream sockets."""

from __future__ import annotations

import enum
import logging
import socket
import struct
import time

__all__ = [
    "NetworkResult",
    "NetworkError",
    "send_data",
    "receive_data",
    "send_size",
    "receive_size",
    "send_prefixed_data",
    "receive_prefixed_data",
]

_RETRY_DELAY = 0.01
_SIZE_FORMAT = struct.Struct("!I")
_MAX_SIZE = (1 << 32) - 1

_log = logging.getLogger(__name__)


class NetworkResult(enum.Enum):
    """Outcome of a network operation; the value is its description."""

    SUCCESS = "success"
    DISCONNECTED = "peer disconnected"
    CONNECTION_REFUSED = "connection refused by peer"
    SOCKET_ERROR = "socket error"
    SEND_ERROR = "error during send operation"
    RECEIVE_ERROR = "error during receive operation"
    ALLOCATION_ERROR = "memory allocation error"

    def __str__(self) -> str:
        return self.value


class NetworkError(Exception):
    """Raised when sending or receiving fails."""

    def __init__(self, result: NetworkResult) -> None:
        super().__init__(result.value)
        self.result = result


def _send_all(sock: socket.socket, payload: bytes, non_blocking_mode: bool) -> None:
    view = memoryview(payload)
    total = 0
    while total < len(view):
        try:
            sent = sock.send(view[total:])
        except BlockingIOError as exc:
            if non_blocking_mode:
                time.sleep(_RETRY_DELAY)
                continue
            _log.error("error sending data: %s", exc)
            raise NetworkError(NetworkResult.SEND_ERROR) from exc
        except OSError as exc:
            _log.error("error sending data: %s", exc)
            raise NetworkError(NetworkResult.SEND_ERROR) from exc
        if sent <= 0:
            raise NetworkError(NetworkResult.SEND_ERROR)
        total += sent


def _receive_exact(sock: socket.socket, length: int, non_blocking_mode: bool) -> bytes:
    if length < 0:
        raise ValueError("length must not be negative")
    buffer = bytearray(length)
    view = memoryview(buffer)
    total = 0
    while total < length:
        try:
            received = sock.recv_into(view[total:])
        except BlockingIOError as exc:
            if non_blocking_mode:
                time.sleep(_RETRY_DELAY)
                continue
            raise NetworkError(NetworkResult.RECEIVE_ERROR) from exc
        except OSError as exc:
            raise NetworkError(NetworkResult.RECEIVE_ERROR) from exc
        if received == 0:
            raise NetworkError(NetworkResult.DISCONNECTED)
        total += received
    return bytes(buffer)


def send_data(sock: socket.socket, data: bytes, non_blocking_mode: bool = False) -> None:
    """Send every byte of ``data``, retrying on would-block in non-blocking mode."""
    _send_all(sock, bytes(data), non_blocking_mode)


def receive_data(sock: socket.socket, length: int, non_blocking_mode: bool = False) -> bytes:
    """Receive exactly ``length`` bytes."""
    return _receive_exact(sock, length, non_blocking_mode)


def send_size(sock: socket.socket, size: int, non_blocking_mode: bool = False) -> None:
    """Send ``size`` as a 32-bit big-endian unsigned integer."""
    if not 0 <= size <= _MAX_SIZE:
        raise ValueError("size must fit in 32 unsigned bits")
    _send_all(sock, _SIZE_FORMAT.pack(size), non_blocking_mode)


def receive_size(sock: socket.socket, non_blocking_mode: bool = False) -> int:
    """Receive a 32-bit big-endian unsigned integer."""
    raw = _receive_exact(sock, _SIZE_FORMAT.size, non_blocking_mode)
    (size,) = _SIZE_FORMAT.unpack(raw)
    return size


def send_prefixed_data(sock: socket.socket, data: bytes, non_blocking_mode: bool = False) -> None:
    """Send ``data`` preceded by its length."""
    payload = bytes(data)
    send_size(sock, len(payload), non_blocking_mode)
    _send_all(sock, payload, non_blocking_mode)


def receive_prefixed_data(sock: socket.socket, non_blocking_mode: bool = False) -> bytes:
    """Receive one length-prefixed message."""
    size = receive_size(sock, non_blocking_mode)
    try:
        return _receive_exact(sock, size, non_blocking_mode)
    except MemoryError as exc:
        raise NetworkError(NetworkResult.ALLOCATION_ERROR) from exc