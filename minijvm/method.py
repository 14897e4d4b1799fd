"""A Java method: its mutable runtime state around an immutable ConstMethod."""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import Any, TextIO

from minijvm.accessflags import AccessFlags
from minijvm.constmethod import ConstMethod
from minijvm.metadata import Metadata


class VtableIndexFlag(IntEnum):
    """Special vtable index values."""

    NONVIRTUAL_VTABLE_INDEX = -2
    PENDING_ITABLE_RESIZE_FLAG = -3
    INVALID_VTABLE_INDEX = -4


class MethodFlags(IntFlag):
    """Internal method flag bits."""

    CALLER_SENSITIVE = 1 << 0
    FORCE_INLINE = 1 << 1
    DONT_INLINE = 1 << 2
    HIDDEN = 1 << 3
    HAS_INJECTED_PROFILE = 1 << 4
    INTRINSIC_CANDIDATE = 1 << 6
    RESERVED_STACK_ACCESS = 1 << 7


class Method(Metadata):
    """Method metadata: access flags, vtable slot, entry points and native hooks."""

    def __init__(self, const_method: ConstMethod, access_flags: AccessFlags | int) -> None:
        self.const_method = const_method
        if not isinstance(access_flags, AccessFlags):
            access_flags = AccessFlags(access_flags)
        self.access_flags = access_flags
        self.vtable_index: int = VtableIndexFlag.INVALID_VTABLE_INDEX
        self.intrinsic_id = 0
        self.flags = MethodFlags(0)
        self.i2i_entry: Any = None
        self.from_compiled_entry: Any = None
        self.from_interpreted_entry: Any = None
        self.native_function: Any = None
        self.signature_handler: Any = None

    # ----- metadata -----------------------------------------------------

    def is_method(self) -> bool:
        return True

    def internal_name(self) -> str:
        return "Method"

    # ----- delegated to the ConstMethod ---------------------------------

    @property
    def constants(self) -> Any:
        return self.const_method.constants

    @property
    def code_size(self) -> int:
        return self.const_method.code_size

    @property
    def code(self) -> bytearray:
        return self.const_method.code

    @property
    def name_index(self) -> int:
        return self.const_method.name_index

    @property
    def signature_index(self) -> int:
        return self.const_method.signature_index

    @property
    def max_stack(self) -> int:
        return self.const_method.max_stack

    @property
    def max_locals(self) -> int:
        return self.const_method.max_locals

    @property
    def size_of_parameters(self) -> int:
        return self.const_method.size_of_parameters

    @size_of_parameters.setter
    def size_of_parameters(self, value: int) -> None:
        self.const_method.size_of_parameters = value

    @property
    def method_idnum(self) -> int:
        return self.const_method.method_idnum

    @method_idnum.setter
    def method_idnum(self, value: int) -> None:
        self.const_method.method_idnum = value

    def name(self) -> str:
        """The method name from the constant pool."""
        return self.constants.utf8_at(self.name_index)

    def signature(self) -> str:
        """The method descriptor from the constant pool."""
        return self.constants.utf8_at(self.signature_index)

    # ----- access flags -------------------------------------------------

    def is_public(self) -> bool:
        return self.access_flags.is_public()

    def is_private(self) -> bool:
        return self.access_flags.is_private()

    def is_protected(self) -> bool:
        return self.access_flags.is_protected()

    def is_static(self) -> bool:
        return self.access_flags.is_static()

    def is_final(self) -> bool:
        return self.access_flags.is_final()

    def is_synchronized(self) -> bool:
        return self.access_flags.is_synchronized()

    def is_native(self) -> bool:
        return self.access_flags.is_native()

    def is_abstract(self) -> bool:
        return self.access_flags.is_abstract()

    # ----- printing -----------------------------------------------------

    def print_on(self, out: TextIO) -> None:
        """Write a one-line description to ``out``."""
        out.write(
            f"Method({id(self):#x}): name_idx={self.name_index}, "
            f"sig_idx={self.signature_index}, flags="
        )
        self.access_flags.print_on(out)
        out.write(f", vtable_index={int(self.vtable_index)}")
        out.write(
            f", code_size={self.code_size}, max_stack={self.max_stack}, "
            f"max_locals={self.max_locals}"
        )