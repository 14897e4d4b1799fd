"""Heap objects: a header (mark word and class) followed by raw field bytes."""

from __future__ import annotations

import math
import struct
from typing import Any, TextIO

from minijvm.globaldefs import HEAP_WORD_SIZE, OOP_SIZE
from minijvm.markword import MarkWord

_OBJECT_HEADER_BYTES = 16
_ARRAY_HEADER_BYTES = 24

_BYTE = struct.Struct("<b")
_UBYTE = struct.Struct("<B")
_CHAR = struct.Struct("<H")
_SHORT = struct.Struct("<h")
_INT = struct.Struct("<i")
_LONG = struct.Struct("<q")
_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")


def _wrap(value: int, bits: int, signed: bool) -> int:
    value = int(value) & ((1 << bits) - 1)
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def _format_pointer(obj: object | None) -> str:
    return "(nil)" if obj is None else f"{id(obj):#x}"


class Oop:
    """A Java object: mark word, class pointer and field bytes addressed by offset.

    Offsets count from the start of the object, so the first field lies at
    offset 16, just past the two-word header.
    """

    MARK_OFFSET_IN_BYTES = 0
    KLASS_OFFSET_IN_BYTES = 8

    def __init__(
        self,
        size_in_bytes: int,
        klass: Any = None,
        mark: MarkWord | None = None,
    ) -> None:
        if size_in_bytes < self._min_size():
            raise ValueError(
                f"object size {size_in_bytes} is smaller than its header "
                f"({self._min_size()} bytes)"
            )
        self._memory = bytearray(size_in_bytes)
        self._refs: dict[int, Oop] = {}
        self.klass = klass
        self.mark: MarkWord | None = mark if mark is not None else MarkWord.prototype()

    @classmethod
    def _min_size(cls) -> int:
        return _OBJECT_HEADER_BYTES

    @property
    def size_in_bytes(self) -> int:
        """Total size of the object, header included."""
        return len(self._memory)

    # ----- header -------------------------------------------------------

    def init_mark(self) -> None:
        """Reset the mark word to the prototype: unlocked, no hash, age zero."""
        self.mark = MarkWord.prototype()

    @staticmethod
    def header_size() -> int:
        """Header size in heap words."""
        return _OBJECT_HEADER_BYTES // HEAP_WORD_SIZE

    # ----- raw field access ---------------------------------------------

    def _check_slot(self, offset: int, size: int) -> None:
        if offset < _OBJECT_HEADER_BYTES or offset + size > len(self._memory):
            raise IndexError(
                f"field at offset {offset} (size {size}) lies outside the "
                f"field area of a {len(self._memory)}-byte object"
            )

    def _drop_refs(self, offset: int, size: int) -> None:
        for ref_offset in [
            r for r in self._refs if r < offset + size and r + OOP_SIZE > offset
        ]:
            del self._refs[ref_offset]

    def _read(self, fmt: struct.Struct, offset: int) -> Any:
        self._check_slot(offset, fmt.size)
        return fmt.unpack_from(self._memory, offset)[0]

    def _write(self, fmt: struct.Struct, offset: int, value: Any) -> None:
        self._check_slot(offset, fmt.size)
        self._drop_refs(offset, fmt.size)
        fmt.pack_into(self._memory, offset, value)

    @staticmethod
    def _as_float32(value: float) -> float:
        try:
            _FLOAT.pack(value)
        except OverflowError:
            return math.copysign(math.inf, value)
        return value

    # ----- typed fields -------------------------------------------------

    def byte_field(self, offset: int) -> int:
        return self._read(_BYTE, offset)

    def byte_field_put(self, offset: int, value: int) -> None:
        self._write(_BYTE, offset, _wrap(value, 8, True))

    def char_field(self, offset: int) -> int:
        return self._read(_CHAR, offset)

    def char_field_put(self, offset: int, value: int) -> None:
        self._write(_CHAR, offset, _wrap(value, 16, False))

    def bool_field(self, offset: int) -> int:
        return self._read(_UBYTE, offset)

    def bool_field_put(self, offset: int, value: int) -> None:
        self._write(_UBYTE, offset, _wrap(value, 8, False))

    def short_field(self, offset: int) -> int:
        return self._read(_SHORT, offset)

    def short_field_put(self, offset: int, value: int) -> None:
        self._write(_SHORT, offset, _wrap(value, 16, True))

    def int_field(self, offset: int) -> int:
        return self._read(_INT, offset)

    def int_field_put(self, offset: int, value: int) -> None:
        self._write(_INT, offset, _wrap(value, 32, True))

    def long_field(self, offset: int) -> int:
        return self._read(_LONG, offset)

    def long_field_put(self, offset: int, value: int) -> None:
        self._write(_LONG, offset, _wrap(value, 64, True))

    def float_field(self, offset: int) -> float:
        return self._read(_FLOAT, offset)

    def float_field_put(self, offset: int, value: float) -> None:
        self._write(_FLOAT, offset, self._as_float32(float(value)))

    def double_field(self, offset: int) -> float:
        return self._read(_DOUBLE, offset)

    def double_field_put(self, offset: int, value: float) -> None:
        self._write(_DOUBLE, offset, float(value))

    def obj_field(self, offset: int) -> Oop | None:
        """The object referenced by the field at ``offset``; None for null."""
        self._check_slot(offset, OOP_SIZE)
        return self._refs.get(offset)

    def obj_field_put(self, offset: int, value: Oop | None) -> None:
        if value is not None and not isinstance(value, Oop):
            raise TypeError(f"reference field needs an object or None, got {type(value).__name__}")
        self._check_slot(offset, OOP_SIZE)
        self._drop_refs(offset, OOP_SIZE)
        self._memory[offset : offset + OOP_SIZE] = bytes(OOP_SIZE)
        if value is not None:
            self._refs[offset] = value

    # ----- lock state and GC --------------------------------------------

    def _mark_word(self) -> MarkWord:
        if self.mark is None:
            raise ValueError("object has no mark word")
        return self.mark

    def is_locked(self) -> bool:
        return self._mark_word().is_locked()

    def is_unlocked(self) -> bool:
        return self._mark_word().is_unlocked()

    def is_gc_marked(self) -> bool:
        return self._mark_word().is_marked()

    def age(self) -> int:
        return self._mark_word().age()

    def incr_age(self) -> None:
        self.mark = self._mark_word().incr_age()

    # ----- printing -----------------------------------------------------

    def print_on(self, out: TextIO) -> None:
        """Write the address, decoded mark word and class pointer to ``out``."""
        out.write(f"oop({id(self):#x}) mark=")
        if self.mark is not None:
            self.mark.print_on(out)
        else:
            out.write("null")
        out.write(f" klass={_format_pointer(self.klass)}")


class InstanceOop(Oop):
    """An ordinary Java instance; fields follow the header directly."""

    @staticmethod
    def header_size() -> int:
        return _OBJECT_HEADER_BYTES // HEAP_WORD_SIZE

    @staticmethod
    def base_offset_in_bytes() -> int:
        """Offset of the first instance field."""
        return _OBJECT_HEADER_BYTES


class ArrayOop(Oop):
    """An array: the object header, a 32-bit length, padding, then elements."""

    def __init__(
        self,
        size_in_bytes: int,
        klass: Any = None,
        length: int = 0,
        mark: MarkWord | None = None,
    ) -> None:
        super().__init__(size_in_bytes, klass, mark)
        self.length = length

    @classmethod
    def _min_size(cls) -> int:
        return _ARRAY_HEADER_BYTES

    @property
    def length(self) -> int:
        """Number of elements."""
        return self.int_field(self.length_offset_in_bytes())

    @length.setter
    def length(self, value: int) -> None:
        self.int_field_put(self.length_offset_in_bytes(), value)

    @staticmethod
    def length_offset_in_bytes() -> int:
        return _OBJECT_HEADER_BYTES

    @staticmethod
    def header_size_in_bytes() -> int:
        return _ARRAY_HEADER_BYTES

    @staticmethod
    def header_size() -> int:
        return _ARRAY_HEADER_BYTES // HEAP_WORD_SIZE

    @staticmethod
    def base_offset_in_bytes() -> int:
        """Offset of element 0."""
        return _ARRAY_HEADER_BYTES


class TypeArrayOop(ArrayOop):
    """An array of a primitive type with typed element access."""

    def _element_offset(self, index: int, element_size: int) -> int:
        if not 0 <= index < self.length:
            raise IndexError(f"array index {index} out of range for length {self.length}")
        return self.base_offset_in_bytes() + index * element_size

    def byte_at(self, index: int) -> int:
        return self.byte_field(self._element_offset(index, 1))

    def byte_at_put(self, index: int, value: int) -> None:
        self.byte_field_put(self._element_offset(index, 1), value)

    def char_at(self, index: int) -> int:
        return self.char_field(self._element_offset(index, 2))

    def char_at_put(self, index: int, value: int) -> None:
        self.char_field_put(self._element_offset(index, 2), value)

    def short_at(self, index: int) -> int:
        return self.short_field(self._element_offset(index, 2))

    def short_at_put(self, index: int, value: int) -> None:
        self.short_field_put(self._element_offset(index, 2), value)

    def int_at(self, index: int) -> int:
        return self.int_field(self._element_offset(index, 4))

    def int_at_put(self, index: int, value: int) -> None:
        self.int_field_put(self._element_offset(index, 4), value)

    def long_at(self, index: int) -> int:
        return self.long_field(self._element_offset(index, 8))

    def long_at_put(self, index: int, value: int) -> None:
        self.long_field_put(self._element_offset(index, 8), value)

    def float_at(self, index: int) -> float:
        return self.float_field(self._element_offset(index, 4))

    def float_at_put(self, index: int, value: float) -> None:
        self.float_field_put(self._element_offset(index, 4), value)

    def double_at(self, index: int) -> float:
        return self.double_field(self._element_offset(index, 8))

    def double_at_put(self, index: int, value: float) -> None:
        self.double_field_put(self._element_offset(index, 8), value)