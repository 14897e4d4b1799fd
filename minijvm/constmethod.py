"""The immutable part of a method: bytecodes, sizes and the exception table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, TextIO

from minijvm.errors import vm_assert

_HAS_LINENUMBER_TABLE = 0x0001
_HAS_CHECKED_EXCEPTIONS = 0x0002
_HAS_LOCALVARIABLE_TABLE = 0x0004
_HAS_EXCEPTION_TABLE = 0x0008
_HAS_GENERIC_SIGNATURE = 0x0010
_HAS_METHOD_PARAMETERS = 0x0020
_IS_OVERPASS = 0x0040


@dataclass(frozen=True)
class ExceptionTableElement:
    """One entry of a method's exception table."""

    start_pc: int
    end_pc: int
    handler_pc: int
    catch_type_index: int


class MethodType(Enum):
    """Whether a method comes from the class file or was generated."""

    NORMAL = 0
    OVERPASS = 1


class ConstMethod:
    """Method data that does not change once the class file has been parsed."""

    def __init__(
        self,
        constants: Any,
        code_size: int,
        max_stack: int,
        max_locals: int,
        name_index: int,
        signature_index: int,
    ) -> None:
        if not 0 <= code_size <= 0xFFFF:
            raise ValueError(f"code size must fit in 16 bits, got {code_size}")
        self.constants = constants
        self.const_method_size = 0
        self._flags = 0
        self.result_type = 0
        self._code_size = code_size
        self.name_index = name_index
        self.signature_index = signature_index
        self.method_idnum = 0
        self.max_stack = max_stack
        self.max_locals = max_locals
        self.size_of_parameters = 0
        self._bytecodes = bytearray(code_size)
        self._exception_table: tuple[ExceptionTableElement, ...] = ()

    # ----- bytecodes ----------------------------------------------------

    @property
    def code_size(self) -> int:
        """Length of the bytecode in bytes."""
        return self._code_size

    @property
    def code(self) -> bytearray:
        """The bytecode buffer."""
        return self._bytecodes

    def bytecode_at(self, bci: int) -> int:
        """The byte at bytecode index ``bci``."""
        vm_assert(0 <= bci < self._code_size, "bci out of bounds")
        return self._bytecodes[bci]

    def set_bytecodes(self, code: bytes) -> None:
        """Copy ``code`` in; its length must equal the code size."""
        vm_assert(len(code) == self._code_size, "code size mismatch")
        self._bytecodes[:] = code

    # ----- internal flags -----------------------------------------------

    def _has(self, bit: int) -> bool:
        return (self._flags & bit) != 0

    def has_linenumber_table(self) -> bool:
        return self._has(_HAS_LINENUMBER_TABLE)

    def has_checked_exceptions(self) -> bool:
        return self._has(_HAS_CHECKED_EXCEPTIONS)

    def has_localvariable_table(self) -> bool:
        return self._has(_HAS_LOCALVARIABLE_TABLE)

    def has_exception_table(self) -> bool:
        return self._has(_HAS_EXCEPTION_TABLE)

    def has_generic_signature(self) -> bool:
        return self._has(_HAS_GENERIC_SIGNATURE)

    def is_overpass(self) -> bool:
        return self._has(_IS_OVERPASS)

    def set_has_linenumber_table(self) -> None:
        self._flags |= _HAS_LINENUMBER_TABLE

    def set_has_checked_exceptions(self) -> None:
        self._flags |= _HAS_CHECKED_EXCEPTIONS

    def set_has_localvariable_table(self) -> None:
        self._flags |= _HAS_LOCALVARIABLE_TABLE

    def set_has_exception_table(self) -> None:
        self._flags |= _HAS_EXCEPTION_TABLE

    # ----- exception table ----------------------------------------------

    @property
    def exception_table(self) -> tuple[ExceptionTableElement, ...]:
        return self._exception_table

    @property
    def exception_table_length(self) -> int:
        return len(self._exception_table)

    def set_exception_table(self, table: Iterable[ExceptionTableElement]) -> None:
        """Install the exception table; a non-empty table sets its flag."""
        self._exception_table = tuple(table)
        if self._exception_table:
            self._flags |= _HAS_EXCEPTION_TABLE

    # ----- printing -----------------------------------------------------

    def print_on(self, out: TextIO) -> None:
        """Write a one-line description to ``out``."""
        out.write(
            f"ConstMethod({id(self):#x}): name_index={self.name_index}, "
            f"sig_index={self.signature_index}, code_size={self._code_size}, "
            f"max_stack={self.max_stack}, max_locals={self.max_locals}"
        )