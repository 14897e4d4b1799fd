"""Class metadata: the base of all classes, and the base of array classes."""

from __future__ import annotations

from enum import IntEnum
from typing import TextIO

from minijvm.accessflags import AccessFlags
from minijvm.errors import vm_assert
from minijvm.globaldefs import BITS_PER_LONG
from minijvm.markword import MarkWord
from minijvm.metadata import Metadata


class KlassID(IntEnum):
    """Identifies the concrete kind of a class."""

    INSTANCE_KLASS = 0
    INSTANCE_REF_KLASS = 1
    INSTANCE_MIRROR_KLASS = 2
    INSTANCE_CLASS_LOADER_KLASS = 3
    TYPE_ARRAY_KLASS = 4
    OBJ_ARRAY_KLASS = 5


KLASS_ID_COUNT = len(KlassID)


def _format_pointer(obj: object | None) -> str:
    return "(nil)" if obj is None else f"{id(obj):#x}"


class Klass(Metadata):
    """Metadata shared by every class: layout, name, super chain and flags.

    ``layout_helper`` is positive for instance classes (the instance size in
    bytes), negative for array classes and zero when neither applies.
    """

    PRIMARY_SUPER_LIMIT = 8

    LH_NEUTRAL_VALUE = 0
    LH_INSTANCE_SLOW_PATH_BIT = 0x01
    LH_LOG2_ELEMENT_SIZE_SHIFT = 0
    LH_LOG2_ELEMENT_SIZE_MASK = BITS_PER_LONG - 1
    LH_ELEMENT_TYPE_SHIFT = 8
    LH_ELEMENT_TYPE_MASK = 0xFF
    LH_HEADER_SIZE_SHIFT = 16
    LH_HEADER_SIZE_MASK = 0xFF
    LH_ARRAY_TAG_SHIFT = 24
    LH_ARRAY_TAG_OBJ_VALUE = -128
    LH_ARRAY_TAG_TYPE_VALUE = -64

    def __init__(self, klass_id: KlassID) -> None:
        self._id = KlassID(klass_id)
        self.layout_helper = self.LH_NEUTRAL_VALUE
        self.super_check_offset = 0
        self.name: str | None = None
        self._primary_supers: list[Klass | None] = [None] * self.PRIMARY_SUPER_LIMIT
        self.super_klass: Klass | None = None
        self.subklass: Klass | None = None
        self.next_sibling: Klass | None = None
        self.access_flags = AccessFlags()
        self.prototype_header = MarkWord.prototype()
        self.vtable_length = 0
        self.modifier_flags = 0

    @property
    def id(self) -> KlassID:
        """The concrete kind of this class; fixed at construction."""
        return self._id

    # ----- metadata -----------------------------------------------------

    def is_klass(self) -> bool:
        return True

    def internal_name(self) -> str:
        return "Klass"

    # ----- layout -------------------------------------------------------

    def is_instance_klass(self) -> bool:
        return self.layout_helper > self.LH_NEUTRAL_VALUE

    def is_array_klass(self) -> bool:
        return self.layout_helper < self.LH_NEUTRAL_VALUE

    @staticmethod
    def instance_layout_helper(size: int, slow_path_flag: bool) -> int:
        """The layout helper of an instance class of ``size`` bytes."""
        return size | (Klass.LH_INSTANCE_SLOW_PATH_BIT if slow_path_flag else 0)

    def size_helper(self) -> int:
        """Instance size in bytes; only meaningful for instance classes."""
        vm_assert(self.is_instance_klass(), "not an instance klass")
        return self.layout_helper

    # ----- access flags -------------------------------------------------

    def is_public(self) -> bool:
        return self.access_flags.is_public()

    def is_final(self) -> bool:
        return self.access_flags.is_final()

    def is_interface(self) -> bool:
        return self.access_flags.is_interface()

    def is_abstract(self) -> bool:
        return self.access_flags.is_abstract()

    # ----- primary supers -----------------------------------------------

    def _check_depth(self, i: int) -> None:
        vm_assert(0 <= i < self.PRIMARY_SUPER_LIMIT, "primary super index out of bounds")

    def primary_super_of_depth(self, i: int) -> Klass | None:
        self._check_depth(i)
        return self._primary_supers[i]

    def set_primary_super(self, i: int, k: Klass | None) -> None:
        self._check_depth(i)
        self._primary_supers[i] = k

    # ----- printing -----------------------------------------------------

    def print_on(self, out: TextIO) -> None:
        """Write a one-line description to ``out``."""
        name = self.name if self.name is not None else "<null>"
        out.write(
            f'Klass({id(self):#x}): name="{name}", layout_helper={self.layout_helper}, '
            f"vtable_len={self.vtable_length}, super={_format_pointer(self.super_klass)}"
        )


class ArrayKlass(Klass):
    """Common base of array classes, linked to the classes one dimension up and down."""

    def __init__(self, klass_id: KlassID) -> None:
        super().__init__(klass_id)
        self.dimension = 1
        self.higher_dimension: Klass | None = None
        self.lower_dimension: Klass | None = None

    def internal_name(self) -> str:
        return "ArrayKlass"