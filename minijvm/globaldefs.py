"""Basic sizes, type codes and alignment helpers shared by the VM."""

from __future__ import annotations

from enum import IntEnum

LOG_BYTES_PER_SHORT = 1
LOG_BYTES_PER_INT = 2
LOG_BYTES_PER_WORD = 3
LOG_BYTES_PER_LONG = 3

BYTES_PER_SHORT = 1 << LOG_BYTES_PER_SHORT
BYTES_PER_INT = 1 << LOG_BYTES_PER_INT
BYTES_PER_WORD = 1 << LOG_BYTES_PER_WORD
BYTES_PER_LONG = 1 << LOG_BYTES_PER_LONG

LOG_BITS_PER_BYTE = 3
LOG_BITS_PER_WORD = LOG_BITS_PER_BYTE + LOG_BYTES_PER_WORD

BITS_PER_BYTE = 1 << LOG_BITS_PER_BYTE
BITS_PER_WORD = 1 << LOG_BITS_PER_WORD
BITS_PER_LONG = BYTES_PER_LONG * BITS_PER_BYTE

OOP_SIZE = 8
WORD_SIZE = 8

K = 1024
M = K * K
G = M * K

MIN_JLONG = -0x8000000000000000
MAX_JLONG = 0x7FFFFFFFFFFFFFFF
MIN_JINT = -0x80000000
MAX_JINT = 0x7FFFFFFF

HEAP_WORD_SIZE = 8
LOG_HEAP_WORD_SIZE = LOG_BYTES_PER_WORD
HEAP_WORDS_PER_LONG = BYTES_PER_LONG // HEAP_WORD_SIZE
LOG_HEAP_WORDS_PER_LONG = LOG_BYTES_PER_LONG - LOG_HEAP_WORD_SIZE


class BasicType(IntEnum):
    """Internal encoding of Java types."""

    BOOLEAN = 4
    CHAR = 5
    FLOAT = 6
    DOUBLE = 7
    BYTE = 8
    SHORT = 9
    INT = 10
    LONG = 11
    OBJECT = 12
    ARRAY = 13
    VOID = 14
    ADDRESS = 15
    NARROWOOP = 16
    METADATA = 17
    NARROWKLASS = 18
    CONFLICT = 19
    ILLEGAL = 99


class JavaThreadState(IntEnum):
    """States a Java thread moves through."""

    UNINITIALIZED = 0
    NEW = 2
    NEW_TRANS = 3
    IN_NATIVE = 4
    IN_NATIVE_TRANS = 5
    IN_VM = 6
    IN_VM_TRANS = 7
    IN_JAVA = 8
    IN_JAVA_TRANS = 9
    BLOCKED = 10
    BLOCKED_TRANS = 11


_TYPE_SIZES = {
    BasicType.BOOLEAN: 1,
    BasicType.BYTE: 1,
    BasicType.CHAR: 2,
    BasicType.SHORT: 2,
    BasicType.INT: 4,
    BasicType.FLOAT: 4,
    BasicType.LONG: 8,
    BasicType.DOUBLE: 8,
    BasicType.OBJECT: OOP_SIZE,
    BasicType.ARRAY: OOP_SIZE,
    BasicType.ADDRESS: WORD_SIZE,
}


def type2size_in_bytes(t: int) -> int:
    """Size in bytes of a value of basic type ``t``, or -1 if it has none."""
    return _TYPE_SIZES.get(t, -1)


def is_power_of_2(x: int) -> bool:
    """True when ``x`` is a positive power of two."""
    return x > 0 and (x & (x - 1)) == 0


def _check_alignment(alignment: int) -> None:
    if not is_power_of_2(alignment):
        raise ValueError(f"alignment must be a power of two, got {alignment}")


def align_up(size: int, alignment: int) -> int:
    """Round ``size`` up to a multiple of ``alignment``."""
    _check_alignment(alignment)
    mask = alignment - 1
    return (size + mask) & ~mask


def align_down(size: int, alignment: int) -> int:
    """Round ``size`` down to a multiple of ``alignment``."""
    _check_alignment(alignment)
    return size & ~(alignment - 1)


def is_aligned(size: int, alignment: int) -> bool:
    """True when ``size`` is a multiple of ``alignment``."""
    return (size & (alignment - 1)) == 0


def nth_bit(n: int) -> int:
    """A word with only bit ``n`` set; zero when ``n`` is past the word."""
    return 0 if n >= BITS_PER_WORD else 1 << n


def right_n_bits(n: int) -> int:
    """A mask of the low ``n`` bits."""
    return nth_bit(n) - 1


def check_obj_alignment(address: int) -> bool:
    """True when an object address lies on a heap-word boundary."""
    return is_aligned(address, HEAP_WORD_SIZE)