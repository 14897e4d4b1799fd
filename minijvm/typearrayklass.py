"""Classes of primitive arrays and allocation of such arrays."""

from __future__ import annotations

from typing import TextIO

from minijvm.globaldefs import G, HEAP_WORD_SIZE, BasicType, align_up
from minijvm.klass import ArrayKlass, KlassID
from minijvm.markword import MarkWord
from minijvm.oop import ArrayOop, TypeArrayOop

_MAX_ARRAY_BYTES = 2 * G


class NegativeArraySizeError(ValueError):
    """An array was requested with a negative length."""


class ArraySizeLimitError(MemoryError):
    """An array was requested that is larger than the VM allows."""


class TypeArrayKlass(ArrayKlass):
    """The class of one primitive array type, such as ``int[]``."""

    def __init__(self, basic_type: BasicType, element_size: int, name: str) -> None:
        super().__init__(KlassID.TYPE_ARRAY_KLASS)
        self.name = name
        self._element_type = BasicType(basic_type)
        self._element_size = element_size
        self._max_length = (
            _MAX_ARRAY_BYTES - ArrayOop.header_size_in_bytes()
        ) // element_size
        self.layout_helper = -1

    @property
    def element_type(self) -> BasicType:
        return self._element_type

    @property
    def element_size(self) -> int:
        return self._element_size

    @property
    def max_length(self) -> int:
        """The largest length an array of this class may have."""
        return self._max_length

    def array_size_in_bytes(self, length: int) -> int:
        """Total size of an array of ``length`` elements, header included and aligned."""
        total = ArrayOop.header_size_in_bytes() + length * self._element_size
        return align_up(total, HEAP_WORD_SIZE)

    def allocate_array(self, length: int) -> TypeArrayOop:
        """A new zero-filled array of ``length`` elements."""
        if length < 0:
            raise NegativeArraySizeError(f"NegativeArraySizeException: {length}")
        if length > self._max_length:
            raise ArraySizeLimitError(
                "OutOfMemoryError: Requested array size exceeds VM limit"
            )
        return TypeArrayOop(
            self.array_size_in_bytes(length),
            klass=self,
            length=length,
            mark=MarkWord.prototype(),
        )

    def internal_name(self) -> str:
        return "TypeArrayKlass"

    def print_on(self, out: TextIO) -> None:
        """Write a one-line description to ``out``."""
        name = self.name if self.name is not None else "<null>"
        out.write(
            f'TypeArrayKlass({id(self):#x}): name="{name}", '
            f"element_type={int(self._element_type)}, element_size={self._element_size}"
        )


_ARRAY_TYPES = (
    (BasicType.BOOLEAN, 1, "[Z"),
    (BasicType.CHAR, 2, "[C"),
    (BasicType.FLOAT, 4, "[F"),
    (BasicType.DOUBLE, 8, "[D"),
    (BasicType.BYTE, 1, "[B"),
    (BasicType.SHORT, 2, "[S"),
    (BasicType.INT, 4, "[I"),
    (BasicType.LONG, 8, "[J"),
)

_registry: dict[BasicType, TypeArrayKlass] = {}


def initialize_all() -> None:
    """Create the array class of every primitive type."""
    _registry.clear()
    for basic_type, size, name in _ARRAY_TYPES:
        _registry[basic_type] = TypeArrayKlass(basic_type, size, name)


def destroy_all() -> None:
    """Forget every primitive array class."""
    _registry.clear()


def for_type(basic_type: int) -> TypeArrayKlass | None:
    """The array class for a primitive basic type, or None."""
    if BasicType.BOOLEAN <= basic_type <= BasicType.LONG:
        return _registry.get(BasicType(basic_type))
    return None


def for_atype(atype: int) -> TypeArrayKlass | None:
    """The array class for a ``newarray`` atype operand, or None."""
    return for_type(atype)