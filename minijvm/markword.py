"""The mark word: the first header word of every object, used as a bit field."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, TextIO

from minijvm.globaldefs import BITS_PER_WORD, right_n_bits

_WORD_MASK = (1 << BITS_PER_WORD) - 1


@dataclass(frozen=True)
class MarkWord:
    """An immutable 64-bit mark word; updates return new values."""

    value: int = 0

    AGE_BITS: ClassVar[int] = 4
    LOCK_BITS: ClassVar[int] = 2
    BIASED_LOCK_BITS: ClassVar[int] = 1
    MAX_HASH_BITS: ClassVar[int] = BITS_PER_WORD - AGE_BITS - LOCK_BITS - BIASED_LOCK_BITS
    HASH_BITS: ClassVar[int] = min(MAX_HASH_BITS, 31)
    CMS_BITS: ClassVar[int] = 1
    EPOCH_BITS: ClassVar[int] = 2

    LOCK_SHIFT: ClassVar[int] = 0
    BIASED_LOCK_SHIFT: ClassVar[int] = LOCK_BITS
    AGE_SHIFT: ClassVar[int] = LOCK_BITS + BIASED_LOCK_BITS
    CMS_SHIFT: ClassVar[int] = AGE_SHIFT + AGE_BITS
    HASH_SHIFT: ClassVar[int] = CMS_SHIFT + CMS_BITS
    EPOCH_SHIFT: ClassVar[int] = HASH_SHIFT

    LOCK_MASK: ClassVar[int] = right_n_bits(LOCK_BITS)
    LOCK_MASK_IN_PLACE: ClassVar[int] = LOCK_MASK << LOCK_SHIFT
    BIASED_LOCK_MASK: ClassVar[int] = right_n_bits(LOCK_BITS + BIASED_LOCK_BITS)
    BIASED_LOCK_MASK_IN_PLACE: ClassVar[int] = BIASED_LOCK_MASK << LOCK_SHIFT
    BIASED_LOCK_BIT_IN_PLACE: ClassVar[int] = 1 << BIASED_LOCK_SHIFT
    AGE_MASK: ClassVar[int] = right_n_bits(AGE_BITS)
    AGE_MASK_IN_PLACE: ClassVar[int] = AGE_MASK << AGE_SHIFT
    EPOCH_MASK: ClassVar[int] = right_n_bits(EPOCH_BITS)
    EPOCH_MASK_IN_PLACE: ClassVar[int] = EPOCH_MASK << EPOCH_SHIFT
    HASH_MASK: ClassVar[int] = right_n_bits(HASH_BITS)
    HASH_MASK_IN_PLACE: ClassVar[int] = HASH_MASK << HASH_SHIFT

    LOCKED_VALUE: ClassVar[int] = 0
    UNLOCKED_VALUE: ClassVar[int] = 1
    MONITOR_VALUE: ClassVar[int] = 2
    MARKED_VALUE: ClassVar[int] = 3
    BIASED_LOCK_PATTERN: ClassVar[int] = 5

    NO_HASH: ClassVar[int] = 0
    NO_HASH_IN_PLACE: ClassVar[int] = NO_HASH << HASH_SHIFT
    NO_LOCK_IN_PLACE: ClassVar[int] = UNLOCKED_VALUE
    MAX_AGE: ClassVar[int] = AGE_MASK

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value & _WORD_MASK)

    # ----- lock state ---------------------------------------------------

    def is_locked(self) -> bool:
        return (self.value & self.LOCK_MASK_IN_PLACE) != self.UNLOCKED_VALUE

    def is_unlocked(self) -> bool:
        return (self.value & self.BIASED_LOCK_MASK_IN_PLACE) == self.UNLOCKED_VALUE

    def is_marked(self) -> bool:
        return (self.value & self.LOCK_MASK_IN_PLACE) == self.MARKED_VALUE

    def is_neutral(self) -> bool:
        return (self.value & self.BIASED_LOCK_MASK_IN_PLACE) == self.UNLOCKED_VALUE

    def has_bias_pattern(self) -> bool:
        return (self.value & self.BIASED_LOCK_MASK_IN_PLACE) == self.BIASED_LOCK_PATTERN

    def has_locker(self) -> bool:
        return (self.value & self.LOCK_MASK_IN_PLACE) == self.LOCKED_VALUE

    def has_monitor(self) -> bool:
        return (self.value & self.MONITOR_VALUE) != 0

    # ----- age ----------------------------------------------------------

    def age(self) -> int:
        return (self.value >> self.AGE_SHIFT) & self.AGE_MASK

    def set_age(self, v: int) -> MarkWord:
        """A copy with the age field replaced by the low bits of ``v``."""
        return MarkWord(
            (self.value & ~self.AGE_MASK_IN_PLACE)
            | ((v & self.AGE_MASK) << self.AGE_SHIFT)
        )

    def incr_age(self) -> MarkWord:
        """A copy one generation older; the age saturates at ``MAX_AGE``."""
        age = self.age()
        return self if age == self.MAX_AGE else self.set_age(age + 1)

    # ----- identity hash ------------------------------------------------

    def hash(self) -> int:
        return (self.value >> self.HASH_SHIFT) & self.HASH_MASK

    def has_no_hash(self) -> bool:
        return self.hash() == self.NO_HASH

    def copy_set_hash(self, hash_value: int) -> MarkWord:
        """A copy with the hash field replaced by the low bits of ``hash_value``."""
        return MarkWord(
            (self.value & ~self.HASH_MASK_IN_PLACE)
            | ((hash_value & self.HASH_MASK) << self.HASH_SHIFT)
        )

    # ----- GC marking ---------------------------------------------------

    def set_marked(self) -> MarkWord:
        return MarkWord((self.value & ~self.LOCK_MASK_IN_PLACE) | self.MARKED_VALUE)

    def set_unmarked(self) -> MarkWord:
        return MarkWord((self.value & ~self.LOCK_MASK_IN_PLACE) | self.UNLOCKED_VALUE)

    # ----- construction and printing ------------------------------------

    @classmethod
    def prototype(cls) -> MarkWord:
        """The mark word of a new object: no hash, age zero, unlocked."""
        return cls(cls.NO_HASH_IN_PLACE | cls.NO_LOCK_IN_PLACE)

    def print_on(self, out: TextIO) -> None:
        """Write the raw value and a decoding of the lock state to ``out``."""
        out.write(f"markOop(0x{self.value:016x})")
        if self.is_neutral():
            out.write(f" [unlocked hash={self.hash()} age={self.age()}]")
        elif self.has_bias_pattern():
            out.write(" [biased]")
        elif self.has_locker():
            out.write(" [thin-locked]")
        elif self.has_monitor():
            out.write(" [inflated]")
        elif self.is_marked():
            out.write(" [gc-marked]")

    def __int__(self) -> int:
        return self.value