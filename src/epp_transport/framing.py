"""
EPP Framing

Length-prefixed framing for the stream transport (RFC 5734).
Each data unit carries a 4-byte unsigned big-endian header holding the
total unit length, header included.
"""

import struct
from typing import Callable

from epp_transport.exceptions import EPPFrameError


HEADER = struct.Struct("!I")
HEADER_SIZE = HEADER.size

# Maximum frame size (10MB)
MAX_FRAME_SIZE = 10 * 1024 * 1024

# Minimum frame size (header only)
MIN_FRAME_SIZE = HEADER_SIZE

RECV_CHUNK_SIZE = 4096


def encode_frame(payload: bytes) -> bytes:
    """
    Prefix payload with its EPP length header.

    Args:
        payload: Serialized XML document

    Returns:
        Header followed by payload

    Raises:
        EPPFrameError: If the frame would exceed MAX_FRAME_SIZE
    """
    total_length = len(payload) + HEADER_SIZE
    if total_length > MAX_FRAME_SIZE:
        raise EPPFrameError(f"Frame too large: {total_length} bytes (max {MAX_FRAME_SIZE})")
    return HEADER.pack(total_length) + payload


def decode_frame_header(header: bytes) -> int:
    """
    Decode an EPP frame header.

    Returns:
        Total frame length, header included

    Raises:
        EPPFrameError: If header is malformed or the length is out of range
    """
    if len(header) != HEADER_SIZE:
        raise EPPFrameError(f"Invalid header length: {len(header)} (expected {HEADER_SIZE})")

    (length,) = HEADER.unpack(header)

    if length < MIN_FRAME_SIZE:
        raise EPPFrameError(f"Frame length too small: {length}")
    if length > MAX_FRAME_SIZE:
        raise EPPFrameError(f"Frame length too large: {length}")

    return length


class FrameReader:
    """
    Reassembles EPP frames from a stream that may deliver partial chunks.

    Bytes received past the end of one frame are kept for the next call.
    """

    def __init__(self, recv: Callable[[int], bytes], chunk_size: int = RECV_CHUNK_SIZE):
        self._recv = recv
        self._chunk_size = chunk_size
        self._buffer = b""

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet returned."""
        return len(self._buffer)

    def _fill(self, size: int, what: str) -> None:
        while len(self._buffer) < size:
            chunk = self._recv(self._chunk_size)
            if not chunk:
                if self._buffer:
                    raise EPPFrameError(f"Connection closed with partial {what}")
                raise EPPFrameError("Connection closed")
            self._buffer += chunk

    def read_frame(self) -> bytes:
        """
        Block until one complete frame is available and return its payload.

        Raises:
            EPPFrameError: If the peer closes mid-frame or sends a bad header
        """
        self._fill(HEADER_SIZE, "header")
        total_length = decode_frame_header(self._buffer[:HEADER_SIZE])

        self._fill(total_length, "frame")
        payload = self._buffer[HEADER_SIZE:total_length]
        self._buffer = self._buffer[total_length:]
        return payload


class FrameWriter:
    """Writes whole frames, retrying on short writes."""

    def __init__(self, send: Callable[[bytes], int]):
        self._send = send

    def write_frame(self, payload: bytes) -> int:
        """
        Write payload as one frame.

        Returns:
            Number of bytes written, header included

        Raises:
            EPPFrameError: If the underlying send makes no progress
        """
        frame = memoryview(encode_frame(payload))
        offset = 0

        while offset < len(frame):
            sent = self._send(frame[offset:])
            if not sent or sent <= 0:
                raise EPPFrameError("Failed to write frame")
            offset += sent

        return offset
