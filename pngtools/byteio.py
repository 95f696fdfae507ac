"""Big-endian integer helpers and raw PNG chunk writing."""

from __future__ import annotations

import struct
import zlib
from typing import BinaryIO

__all__ = ["read_u8", "read_u16", "read_u32", "write_u32", "write_chunk"]

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def read_u8(stream: BinaryIO) -> int:
    """Read one unsigned byte from ``stream``."""
    return _U8.unpack(_read_exact(stream, _U8.size))[0]


def read_u16(stream: BinaryIO) -> int:
    """Read a big-endian unsigned 16-bit integer from ``stream``."""
    return _U16.unpack(_read_exact(stream, _U16.size))[0]


def read_u32(stream: BinaryIO) -> int:
    """Read a big-endian unsigned 32-bit integer from ``stream``."""
    return _U32.unpack(_read_exact(stream, _U32.size))[0]


def write_u32(stream: BinaryIO, value: int) -> None:
    """Write ``value`` to ``stream`` as a big-endian unsigned 32-bit integer."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"value out of range for u32: {value}")
    stream.write(_U32.pack(value))


def write_chunk(stream: BinaryIO, name: bytes, data: bytes) -> None:
    """Write a PNG chunk: length, four-byte type, data and CRC-32 of type and data."""
    name = bytes(name)
    data = bytes(data)
    if len(name) != 4:
        raise ValueError(f"chunk type must be 4 bytes, got {len(name)}")
    write_u32(stream, len(data))
    stream.write(name)
    stream.write(data)
    write_u32(stream, zlib.crc32(data, zlib.crc32(name)) & 0xFFFFFFFF)