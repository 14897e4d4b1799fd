"""Constant pool tag values and a tag wrapper with type queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ConstantTagValue(IntEnum):
    """Tags from class files plus the VM's internal resolution states."""

    INVALID = 0
    UTF8 = 1
    UNICODE = 2
    INTEGER = 3
    FLOAT = 4
    LONG = 5
    DOUBLE = 6
    CLASS = 7
    STRING = 8
    FIELDREF = 9
    METHODREF = 10
    INTERFACE_METHODREF = 11
    NAME_AND_TYPE = 12
    METHOD_HANDLE = 15
    METHOD_TYPE = 16
    DYNAMIC = 17
    INVOKE_DYNAMIC = 18
    EXTERNAL_MAX = 18

    INTERNAL_MIN = 100
    UNRESOLVED_CLASS = 100
    CLASS_INDEX = 101
    STRING_INDEX = 102
    UNRESOLVED_CLASS_IN_ERROR = 103
    METHOD_HANDLE_IN_ERROR = 104
    METHOD_TYPE_IN_ERROR = 105
    DYNAMIC_IN_ERROR = 106
    INTERNAL_MAX = 106


_T = ConstantTagValue

_NAMES = {
    _T.INVALID: "Invalid",
    _T.UTF8: "Utf8",
    _T.INTEGER: "Integer",
    _T.FLOAT: "Float",
    _T.LONG: "Long",
    _T.DOUBLE: "Double",
    _T.CLASS: "Class",
    _T.STRING: "String",
    _T.FIELDREF: "Fieldref",
    _T.METHODREF: "Methodref",
    _T.INTERFACE_METHODREF: "InterfaceMethodref",
    _T.NAME_AND_TYPE: "NameAndType",
    _T.METHOD_HANDLE: "MethodHandle",
    _T.METHOD_TYPE: "MethodType",
    _T.DYNAMIC: "Dynamic",
    _T.INVOKE_DYNAMIC: "InvokeDynamic",
    _T.UNRESOLVED_CLASS: "UnresolvedClass",
    _T.CLASS_INDEX: "ClassIndex",
    _T.STRING_INDEX: "StringIndex",
}


@dataclass(frozen=True)
class ConstantTag:
    """One constant pool tag."""

    value: int = ConstantTagValue.INVALID

    def is_klass(self) -> bool:
        return self.value == _T.CLASS

    def is_field(self) -> bool:
        return self.value == _T.FIELDREF

    def is_method(self) -> bool:
        return self.value == _T.METHODREF

    def is_interface_method(self) -> bool:
        return self.value == _T.INTERFACE_METHODREF

    def is_string(self) -> bool:
        return self.value == _T.STRING

    def is_int(self) -> bool:
        return self.value == _T.INTEGER

    def is_float(self) -> bool:
        return self.value == _T.FLOAT

    def is_long(self) -> bool:
        return self.value == _T.LONG

    def is_double(self) -> bool:
        return self.value == _T.DOUBLE

    def is_name_and_type(self) -> bool:
        return self.value == _T.NAME_AND_TYPE

    def is_utf8(self) -> bool:
        return self.value == _T.UTF8

    def is_method_handle(self) -> bool:
        return self.value == _T.METHOD_HANDLE

    def is_method_type(self) -> bool:
        return self.value == _T.METHOD_TYPE

    def is_dynamic_constant(self) -> bool:
        return self.value == _T.DYNAMIC

    def is_invoke_dynamic(self) -> bool:
        return self.value == _T.INVOKE_DYNAMIC

    def is_invalid(self) -> bool:
        return self.value == _T.INVALID

    def is_unresolved_klass(self) -> bool:
        return self.value == _T.UNRESOLVED_CLASS

    def is_klass_index(self) -> bool:
        return self.value == _T.CLASS_INDEX

    def is_string_index(self) -> bool:
        return self.value == _T.STRING_INDEX

    def is_klass_or_reference(self) -> bool:
        """True for a class entry in any of its resolution states."""
        return self.is_klass() or self.is_unresolved_klass() or self.is_klass_index()

    def is_double_slot(self) -> bool:
        """True for Long and Double, which take two pool slots."""
        return self.value in (_T.LONG, _T.DOUBLE)

    def to_string(self) -> str:
        """A readable name for the tag, ``"Unknown"`` if it has none."""
        try:
            return _NAMES[ConstantTagValue(self.value)]
        except (ValueError, KeyError):
            return "Unknown"

    def __str__(self) -> str:
        return self.to_string()