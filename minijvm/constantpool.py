"""The runtime constant pool: tagged slots holding literals and symbolic references."""

from __future__ import annotations

import struct
from typing import TextIO

from minijvm.constanttag import ConstantTag, ConstantTagValue
from minijvm.errors import vm_assert

_T = ConstantTagValue

_F32 = struct.Struct("<f")
_I32 = struct.Struct("<i")
_F64 = struct.Struct("<d")
_I64 = struct.Struct("<q")


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def _pack_pair(high: int, low: int) -> int:
    return (high << 16) | low


class ConstantPool:
    """Constant pool with one tag and one data slot per entry; slot 0 is unused."""

    def __init__(self, length: int) -> None:
        if length < 0:
            raise ValueError(f"constant pool length must not be negative, got {length}")
        self._length = length
        self._tags: list[int] = [int(_T.INVALID)] * length
        self._data: list[object] = [0] * length
        self.pool_holder: object | None = None

    @property
    def length(self) -> int:
        """Number of slots, including the unused slot 0."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def is_constant_pool(self) -> bool:
        return True

    # ----- checks -------------------------------------------------------

    def _check_index(self, index: int) -> None:
        vm_assert(0 <= index < self._length, "index out of bounds")

    def _check_tag(self, index: int, allowed: tuple[int, ...], msg: str) -> None:
        self._check_index(index)
        vm_assert(self._tags[index] in allowed, msg)

    def _put(self, index: int, tag: int, value: object) -> None:
        self._check_index(index)
        self._tags[index] = int(tag)
        self._data[index] = value

    def _int_slot(self, index: int) -> int:
        value = self._data[index]
        if not isinstance(value, int):
            raise TypeError(f"slot {index} does not hold a numeric value")
        return value

    # ----- queries ------------------------------------------------------

    def tag_at(self, index: int) -> ConstantTag:
        self._check_index(index)
        return ConstantTag(self._tags[index])

    # ----- writers ------------------------------------------------------

    def utf8_at_put(self, index: int, data: bytes | str) -> None:
        """Store a UTF-8 string; bytes that are not valid UTF-8 are kept as escapes."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            text = bytes(data).decode("utf-8", errors="surrogateescape")
        else:
            text = str(data)
        self._put(index, _T.UTF8, text)

    def int_at_put(self, index: int, value: int) -> None:
        self._put(index, _T.INTEGER, _to_signed(value, 32))

    def float_at_put(self, index: int, value: float) -> None:
        bits = _I32.unpack(_F32.pack(value))[0]
        self._put(index, _T.FLOAT, bits)

    def long_at_put(self, index: int, value: int) -> None:
        """Store a long; it takes this slot and the next."""
        self._check_index(index + 1)
        self._put(index, _T.LONG, _to_signed(value, 64))
        self._tags[index + 1] = int(_T.INVALID)

    def double_at_put(self, index: int, value: float) -> None:
        """Store a double; it takes this slot and the next."""
        self._check_index(index + 1)
        bits = _I64.unpack(_F64.pack(value))[0]
        self._put(index, _T.DOUBLE, bits)
        self._tags[index + 1] = int(_T.INVALID)

    def klass_index_at_put(self, index: int, name_index: int) -> None:
        self._put(index, _T.CLASS_INDEX, name_index)

    def unresolved_klass_at_put(self, index: int, name_index: int) -> None:
        self._put(index, _T.UNRESOLVED_CLASS, name_index)

    def string_index_at_put(self, index: int, utf8_index: int) -> None:
        self._put(index, _T.STRING_INDEX, utf8_index)

    def unresolved_string_at_put(self, index: int, utf8_index: int) -> None:
        self._put(index, _T.STRING, utf8_index)

    def field_at_put(self, index: int, class_index: int, name_and_type_index: int) -> None:
        self._put(index, _T.FIELDREF, _pack_pair(name_and_type_index, class_index))

    def method_at_put(self, index: int, class_index: int, name_and_type_index: int) -> None:
        self._put(index, _T.METHODREF, _pack_pair(name_and_type_index, class_index))

    def interface_method_at_put(
        self, index: int, class_index: int, name_and_type_index: int
    ) -> None:
        self._put(
            index, _T.INTERFACE_METHODREF, _pack_pair(name_and_type_index, class_index)
        )

    def name_and_type_at_put(self, index: int, name_index: int, signature_index: int) -> None:
        self._put(index, _T.NAME_AND_TYPE, _pack_pair(signature_index, name_index))

    def method_handle_index_at_put(self, index: int, ref_kind: int, method_index: int) -> None:
        self._put(index, _T.METHOD_HANDLE, _pack_pair(method_index, ref_kind))

    def method_type_index_at_put(self, index: int, signature_index: int) -> None:
        self._put(index, _T.METHOD_TYPE, signature_index)

    def invoke_dynamic_at_put(
        self, index: int, bootstrap_method_attr_index: int, name_and_type_index: int
    ) -> None:
        self._put(
            index,
            _T.INVOKE_DYNAMIC,
            _pack_pair(name_and_type_index, bootstrap_method_attr_index),
        )

    def dynamic_constant_at_put(
        self, index: int, bootstrap_method_attr_index: int, name_and_type_index: int
    ) -> None:
        self._put(
            index,
            _T.DYNAMIC,
            _pack_pair(name_and_type_index, bootstrap_method_attr_index),
        )

    # ----- readers ------------------------------------------------------

    def data_at(self, index: int) -> object:
        """The raw slot content: a number, or the string of a Utf8 entry."""
        self._check_index(index)
        return self._data[index]

    def utf8_at(self, index: int) -> str:
        self._check_tag(index, (_T.UTF8,), "not a Utf8 entry")
        return self._data[index]  # type: ignore[return-value]

    def int_at(self, index: int) -> int:
        self._check_tag(index, (_T.INTEGER,), "not an Integer entry")
        return _to_signed(self._int_slot(index), 32)

    def float_at(self, index: int) -> float:
        self._check_tag(index, (_T.FLOAT,), "not a Float entry")
        bits = _to_signed(self._int_slot(index), 32)
        return _F32.unpack(_I32.pack(bits))[0]

    def long_at(self, index: int) -> int:
        self._check_tag(index, (_T.LONG,), "not a Long entry")
        return _to_signed(self._int_slot(index), 64)

    def double_at(self, index: int) -> float:
        self._check_tag(index, (_T.DOUBLE,), "not a Double entry")
        bits = _to_signed(self._int_slot(index), 64)
        return _F64.unpack(_I64.pack(bits))[0]

    def klass_name_index_at(self, index: int) -> int:
        self._check_tag(
            index, (_T.CLASS_INDEX, _T.UNRESOLVED_CLASS), "not a Class entry"
        )
        return self._int_slot(index)

    def string_utf8_index_at(self, index: int) -> int:
        self._check_tag(index, (_T.STRING_INDEX, _T.STRING), "not a String entry")
        return self._int_slot(index)

    def unchecked_klass_ref_index_at(self, index: int) -> int:
        return self._int_slot(index) & 0xFFFF

    def unchecked_name_and_type_ref_index_at(self, index: int) -> int:
        return (self._int_slot(index) >> 16) & 0xFFFF

    def name_ref_index_at(self, index: int) -> int:
        self._check_tag(index, (_T.NAME_AND_TYPE,), "not a NameAndType entry")
        return self._int_slot(index) & 0xFFFF

    def signature_ref_index_at(self, index: int) -> int:
        self._check_tag(index, (_T.NAME_AND_TYPE,), "not a NameAndType entry")
        return (self._int_slot(index) >> 16) & 0xFFFF

    # ----- conveniences -------------------------------------------------

    def klass_name_at(self, index: int) -> str:
        """The class name of a Class entry."""
        return self.utf8_at(self.klass_name_index_at(index))

    def name_at(self, name_and_type_index: int) -> str:
        """The name of a NameAndType entry."""
        return self.utf8_at(self.name_ref_index_at(name_and_type_index))

    def signature_at(self, name_and_type_index: int) -> str:
        """The descriptor of a NameAndType entry."""
        return self.utf8_at(self.signature_ref_index_at(name_and_type_index))

    # ----- printing -----------------------------------------------------

    def _is_utf8_slot(self, index: int) -> bool:
        return 0 < index < self._length and self._tags[index] == _T.UTF8

    def _describe(self, i: int, tag: int) -> tuple[str, bool]:
        """Text for entry ``i`` and whether the next slot belongs to it."""
        match tag:
            case _T.UTF8:
                return self.utf8_at(i), False
            case _T.INTEGER:
                return str(self.int_at(i)), False
            case _T.FLOAT:
                return f"{self.float_at(i):f}", False
            case _T.LONG:
                return f"{self.long_at(i)}L", True
            case _T.DOUBLE:
                return f"{self.double_at(i):f}", True
            case _T.CLASS | _T.CLASS_INDEX | _T.UNRESOLVED_CLASS:
                name_idx = self._int_slot(i)
                text = f"#{name_idx}"
                if self._is_utf8_slot(name_idx):
                    text += f"  // {self.utf8_at(name_idx)}"
                return text, False
            case _T.STRING | _T.STRING_INDEX:
                utf8_idx = self._int_slot(i)
                text = f"#{utf8_idx}"
                if self._is_utf8_slot(utf8_idx):
                    text += f"  // {self.utf8_at(utf8_idx)}"
                return text, False
            case _T.FIELDREF | _T.METHODREF | _T.INTERFACE_METHODREF:
                return (
                    f"#{self.unchecked_klass_ref_index_at(i)}"
                    f".#{self.unchecked_name_and_type_ref_index_at(i)}",
                    False,
                )
            case _T.NAME_AND_TYPE:
                n = self.name_ref_index_at(i)
                s = self.signature_ref_index_at(i)
                text = f"#{n}:#{s}"
                if self._is_utf8_slot(n) and self._is_utf8_slot(s):
                    text += f"  // {self.utf8_at(n)}:{self.utf8_at(s)}"
                return text, False
            case _T.METHOD_HANDLE:
                raw = self._int_slot(i)
                return f"kind={raw & 0xFFFF}, #{(raw >> 16) & 0xFFFF}", False
            case _T.METHOD_TYPE:
                return f"#{self._int_slot(i)}", False
            case _T.INVOKE_DYNAMIC | _T.DYNAMIC:
                raw = self._int_slot(i)
                return f"bsm=#{raw & 0xFFFF}, #{(raw >> 16) & 0xFFFF}", False
            case _T.INVALID:
                return "(invalid/padding)", False
            case _:
                return f"(unknown tag {tag})", False

    def print_on(self, out: TextIO) -> None:
        """Write every entry, one per line, in javap-like form."""
        out.write(f"Constant Pool [{self._length} entries]:\n")
        i = 1
        while i < self._length:
            tag = self.tag_at(i)
            text, wide = self._describe(i, tag.value)
            out.write(f"  #{i:<4} = {tag.to_string():<20} {text}\n")
            i += 2 if wide else 1

    def __repr__(self) -> str:
        return f"ConstantPool(length={self._length})"