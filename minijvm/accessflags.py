"""Java access flags plus the VM's internal method, class and field bits."""

from __future__ import annotations

from typing import TextIO

_U32 = 0xFFFFFFFF

# Standard flags shared by classes, fields and methods.
JVM_ACC_PUBLIC = 0x0001
JVM_ACC_PRIVATE = 0x0002
JVM_ACC_PROTECTED = 0x0004
JVM_ACC_STATIC = 0x0008
JVM_ACC_FINAL = 0x0010
JVM_ACC_SYNCHRONIZED = 0x0020
JVM_ACC_SUPER = 0x0020
JVM_ACC_VOLATILE = 0x0040
JVM_ACC_BRIDGE = 0x0040
JVM_ACC_TRANSIENT = 0x0080
JVM_ACC_VARARGS = 0x0080
JVM_ACC_NATIVE = 0x0100
JVM_ACC_INTERFACE = 0x0200
JVM_ACC_ABSTRACT = 0x0400
JVM_ACC_STRICT = 0x0800
JVM_ACC_SYNTHETIC = 0x1000
JVM_ACC_ANNOTATION = 0x2000
JVM_ACC_ENUM = 0x4000

JVM_ACC_WRITTEN_FLAGS = 0x00007FFF

# Method-only internal flags.
JVM_ACC_MONITOR_MATCH = 0x10000000
JVM_ACC_HAS_MONITOR_BYTECODES = 0x20000000
JVM_ACC_HAS_LOOPS = 0x40000000
JVM_ACC_LOOPS_FLAG_INIT = 0x80000000
JVM_ACC_QUEUED = 0x01000000
JVM_ACC_NOT_C2_COMPILABLE = 0x02000000
JVM_ACC_NOT_C1_COMPILABLE = 0x04000000
JVM_ACC_NOT_C2_OSR_COMPILABLE = 0x08000000
JVM_ACC_HAS_LINE_NUMBER_TABLE = 0x00100000
JVM_ACC_HAS_CHECKED_EXCEPTIONS = 0x00400000
JVM_ACC_HAS_JSRS = 0x00800000
JVM_ACC_IS_OLD = 0x00010000
JVM_ACC_IS_OBSOLETE = 0x00020000
JVM_ACC_IS_PREFIXED_NATIVE = 0x00040000
JVM_ACC_ON_STACK = 0x00080000
JVM_ACC_IS_DELETED = 0x00008000

# Class-only internal flags (share values with method flags).
JVM_ACC_HAS_MIRANDA_METHODS = 0x10000000
JVM_ACC_HAS_VANILLA_CONSTRUCTOR = 0x20000000
JVM_ACC_HAS_FINALIZER = 0x40000000
JVM_ACC_IS_CLONEABLE_FAST = 0x80000000
JVM_ACC_HAS_FINAL_METHOD = 0x01000000
JVM_ACC_IS_SHARED_CLASS = 0x02000000

JVM_ACC_HAS_LOCAL_VARIABLE_TABLE = 0x00200000
JVM_ACC_PROMOTED_FLAGS = 0x00200000

# Field-only internal flags.
JVM_ACC_FIELD_ACCESS_WATCHED = 0x00002000
JVM_ACC_FIELD_MODIFICATION_WATCHED = 0x00008000
JVM_ACC_FIELD_INTERNAL = 0x00000400
JVM_ACC_FIELD_STABLE = 0x00000020
JVM_ACC_FIELD_INITIALIZED_FINAL_UPDATE = 0x00000100
JVM_ACC_FIELD_HAS_GENERIC_SIGNATURE = 0x00000800


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


class AccessFlags:
    """A 32-bit set of access flags with typed queries."""

    __slots__ = ("_flags",)

    def __init__(self, flags: int = 0) -> None:
        self._flags = flags & _U32

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AccessFlags):
            return self._flags == other._flags
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AccessFlags(0x{self._flags:08X})"

    def _has(self, bit: int) -> bool:
        return (self._flags & bit) != 0

    # Standard flags.
    def is_public(self) -> bool:
        return self._has(JVM_ACC_PUBLIC)

    def is_private(self) -> bool:
        return self._has(JVM_ACC_PRIVATE)

    def is_protected(self) -> bool:
        return self._has(JVM_ACC_PROTECTED)

    def is_static(self) -> bool:
        return self._has(JVM_ACC_STATIC)

    def is_final(self) -> bool:
        return self._has(JVM_ACC_FINAL)

    def is_synchronized(self) -> bool:
        return self._has(JVM_ACC_SYNCHRONIZED)

    def is_super(self) -> bool:
        return self._has(JVM_ACC_SUPER)

    def is_volatile(self) -> bool:
        return self._has(JVM_ACC_VOLATILE)

    def is_transient(self) -> bool:
        return self._has(JVM_ACC_TRANSIENT)

    def is_native(self) -> bool:
        return self._has(JVM_ACC_NATIVE)

    def is_interface(self) -> bool:
        return self._has(JVM_ACC_INTERFACE)

    def is_abstract(self) -> bool:
        return self._has(JVM_ACC_ABSTRACT)

    def is_strict(self) -> bool:
        return self._has(JVM_ACC_STRICT)

    def is_synthetic(self) -> bool:
        return self._has(JVM_ACC_SYNTHETIC)

    # Method flags.
    def has_monitor_bytecodes(self) -> bool:
        return self._has(JVM_ACC_HAS_MONITOR_BYTECODES)

    def has_loops(self) -> bool:
        return self._has(JVM_ACC_HAS_LOOPS)

    def has_linenumber_table(self) -> bool:
        return self._has(JVM_ACC_HAS_LINE_NUMBER_TABLE)

    def has_checked_exceptions(self) -> bool:
        return self._has(JVM_ACC_HAS_CHECKED_EXCEPTIONS)

    def has_localvariable_table(self) -> bool:
        return self._has(JVM_ACC_HAS_LOCAL_VARIABLE_TABLE)

    # Class flags.
    def has_miranda_methods(self) -> bool:
        return self._has(JVM_ACC_HAS_MIRANDA_METHODS)

    def has_vanilla_constructor(self) -> bool:
        return self._has(JVM_ACC_HAS_VANILLA_CONSTRUCTOR)

    def has_finalizer(self) -> bool:
        return self._has(JVM_ACC_HAS_FINALIZER)

    def is_cloneable_fast(self) -> bool:
        return self._has(JVM_ACC_IS_CLONEABLE_FAST)

    def has_final_method(self) -> bool:
        return self._has(JVM_ACC_HAS_FINAL_METHOD)

    # Modification.
    def get_flags(self) -> int:
        """The flags as written in a class file (low 15 bits)."""
        return self._flags & JVM_ACC_WRITTEN_FLAGS

    def set_flags(self, flags: int) -> None:
        """Replace all flags with the class-file bits of ``flags``."""
        self._flags = flags & JVM_ACC_WRITTEN_FLAGS

    def atomic_set_bits(self, bits: int) -> None:
        self._flags = (self._flags | bits) & _U32

    def atomic_clear_bits(self, bits: int) -> None:
        self._flags = self._flags & ~bits & _U32

    def set_has_finalizer(self) -> None:
        self.atomic_set_bits(JVM_ACC_HAS_FINALIZER)

    def set_has_final_method(self) -> None:
        self.atomic_set_bits(JVM_ACC_HAS_FINAL_METHOD)

    def set_has_vanilla_constructor(self) -> None:
        self.atomic_set_bits(JVM_ACC_HAS_VANILLA_CONSTRUCTOR)

    def set_has_miranda_methods(self) -> None:
        self.atomic_set_bits(JVM_ACC_HAS_MIRANDA_METHODS)

    def set_is_cloneable_fast(self) -> None:
        self.atomic_set_bits(JVM_ACC_IS_CLONEABLE_FAST)

    def set_has_linenumber_table(self) -> None:
        self.atomic_set_bits(JVM_ACC_HAS_LINE_NUMBER_TABLE)

    def set_has_checked_exceptions(self) -> None:
        self.atomic_set_bits(JVM_ACC_HAS_CHECKED_EXCEPTIONS)

    def set_has_localvariable_table(self) -> None:
        self.atomic_set_bits(JVM_ACC_HAS_LOCAL_VARIABLE_TABLE)

    # Conversions.
    def as_short(self) -> int:
        """The low 16 bits as a signed short."""
        return _to_signed(self._flags, 16)

    def as_int(self) -> int:
        """All 32 bits as a signed int."""
        return _to_signed(self._flags, 32)

    def print_on(self, out: TextIO) -> None:
        """Write the hex value and the set standard modifiers to ``out``."""
        out.write(f"0x{self._flags:08X} [")
        for present, word in (
            (self.is_public(), "public"),
            (self.is_private(), "private"),
            (self.is_protected(), "protected"),
            (self.is_static(), "static"),
            (self.is_final(), "final"),
            (self.is_synchronized(), "synchronized"),
            (self.is_native(), "native"),
            (self.is_interface(), "interface"),
            (self.is_abstract(), "abstract"),
        ):
            if present:
                out.write(f" {word}")
        out.write(" ]")