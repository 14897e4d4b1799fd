"""Big-endian (Java order) reading and writing of unsigned integers."""

from __future__ import annotations

import struct
import sys
from enum import IntEnum


class Endian(IntEnum):
    """Byte orders; Java data is always big-endian."""

    LITTLE = 0
    BIG = 1
    JAVA = 1
    NATIVE = 0 if sys.byteorder == "little" else 1

    @staticmethod
    def is_java_byte_ordering_different() -> bool:
        """True when the host order differs from Java order."""
        return Endian.NATIVE != Endian.JAVA


def _swap(x: int, size: int) -> int:
    mask = (1 << (size * 8)) - 1
    return int.from_bytes((x & mask).to_bytes(size, "little"), "big")


def swap_u2(x: int) -> int:
    """Reverse the bytes of a 16-bit value."""
    return _swap(x, 2)


def swap_u4(x: int) -> int:
    """Reverse the bytes of a 32-bit value."""
    return _swap(x, 4)


def swap_u8(x: int) -> int:
    """Reverse the bytes of a 64-bit value."""
    return _swap(x, 8)


_U2 = struct.Struct(">H")
_U4 = struct.Struct(">I")
_U8 = struct.Struct(">Q")


def get_java_u2(data: bytes, offset: int = 0) -> int:
    """Read a big-endian unsigned 16-bit value at ``offset``."""
    return _U2.unpack_from(data, offset)[0]


def get_java_u4(data: bytes, offset: int = 0) -> int:
    """Read a big-endian unsigned 32-bit value at ``offset``."""
    return _U4.unpack_from(data, offset)[0]


def get_java_u8(data: bytes, offset: int = 0) -> int:
    """Read a big-endian unsigned 64-bit value at ``offset``."""
    return _U8.unpack_from(data, offset)[0]


def put_java_u2(buffer: bytearray, offset: int, value: int) -> None:
    """Write ``value`` as a big-endian unsigned 16-bit value at ``offset``."""
    _U2.pack_into(buffer, offset, value & 0xFFFF)


def put_java_u4(buffer: bytearray, offset: int, value: int) -> None:
    """Write ``value`` as a big-endian unsigned 32-bit value at ``offset``."""
    _U4.pack_into(buffer, offset, value & 0xFFFFFFFF)