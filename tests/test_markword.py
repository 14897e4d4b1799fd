import io

import pytest

from minijvm.markword import MarkWord


def _printed(mark: MarkWord) -> str:
    out = io.StringIO()
    mark.print_on(out)
    return out.getvalue()


def test_prototype_is_unlocked_with_no_hash_and_age_zero():
    proto = MarkWord.prototype()
    assert proto.value == 1
    assert proto.is_unlocked()
    assert proto.is_neutral()
    assert not proto.is_locked()
    assert proto.has_no_hash()
    assert proto.age() == 0


def test_field_layout_constants():
    assert MarkWord.HASH_BITS == 31
    assert MarkWord.prototype().copy_set_hash(-1).hash() == (1 << 31) - 1
    assert MarkWord(1 << MarkWord.AGE_SHIFT).age() == 1
    assert MarkWord(1 << MarkWord.HASH_SHIFT).hash() == 1
    assert MarkWord.prototype().set_age(MarkWord.MAX_AGE).age() == MarkWord.AGE_MASK


def test_locked_value():
    m = MarkWord(MarkWord.LOCKED_VALUE)
    assert m.is_locked()
    assert m.has_locker()
    assert not m.has_monitor()
    assert not m.is_unlocked()


def test_monitor_value():
    m = MarkWord(MarkWord.MONITOR_VALUE)
    assert m.has_monitor()
    assert m.is_locked()
    assert not m.has_locker()


def test_biased_pattern():
    m = MarkWord(MarkWord.BIASED_LOCK_PATTERN)
    assert m.has_bias_pattern()
    assert not m.is_neutral()
    assert not m.is_locked()


@pytest.mark.parametrize("age", range(16))
def test_set_age_round_trip(age):
    m = MarkWord.prototype().set_age(age)
    assert m.age() == age
    assert m.is_unlocked()
    assert m.hash() == 0


def test_incr_age_saturates():
    m = MarkWord.prototype()
    for expected in range(1, MarkWord.MAX_AGE + 1):
        m = m.incr_age()
        assert m.age() == expected
    assert m.incr_age() == m


def test_hash_round_trip_preserves_other_bits():
    m = MarkWord.prototype().set_age(5).copy_set_hash(0x1234567)
    assert m.hash() == 0x1234567
    assert m.age() == 5
    assert m.is_unlocked()
    assert not m.has_no_hash()


def test_hash_is_masked_to_hash_bits():
    m = MarkWord.prototype().copy_set_hash(MarkWord.HASH_MASK + 1)
    assert m.hash() == 0
    big = MarkWord.prototype().copy_set_hash(-1)
    assert big.hash() == MarkWord.HASH_MASK


def test_set_marked_and_unmarked():
    m = MarkWord.prototype().copy_set_hash(77).set_age(3)
    marked = m.set_marked()
    assert marked.is_marked()
    assert marked.hash() == 77
    assert marked.age() == 3
    unmarked = marked.set_unmarked()
    assert unmarked == m
    assert not unmarked.is_marked()


def test_value_is_immutable_and_masked():
    m = MarkWord(1 << 70 | 1)
    assert m.value == 1
    with pytest.raises(AttributeError):
        m.value = 5  # type: ignore[misc]


def test_print_prototype():
    assert _printed(MarkWord.prototype()) == (
        "markOop(0x0000000000000001) [unlocked hash=0 age=0]"
    )


@pytest.mark.parametrize(
    "value, label",
    [
        (MarkWord.BIASED_LOCK_PATTERN, "[biased]"),
        (MarkWord.LOCKED_VALUE, "[thin-locked]"),
        (MarkWord.MONITOR_VALUE, "[inflated]"),
        (MarkWord.MARKED_VALUE, "[inflated]"),
    ],
)
def test_print_states(value, label):
    assert _printed(MarkWord(value)).endswith(label)


def test_print_shows_hash_and_age():
    text = _printed(MarkWord.prototype().copy_set_hash(99).set_age(7))
    assert text.endswith("[unlocked hash=99 age=7]")