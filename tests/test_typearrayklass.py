import io

import pytest

from minijvm.globaldefs import G, BasicType
from minijvm.oop import TypeArrayOop
from minijvm.typearrayklass import (
    ArraySizeLimitError,
    NegativeArraySizeError,
    TypeArrayKlass,
    destroy_all,
    for_atype,
    for_type,
    initialize_all,
)


@pytest.fixture
def klasses():
    initialize_all()
    yield
    destroy_all()


@pytest.mark.parametrize(
    "basic_type,name",
    [
        (BasicType.BOOLEAN, "[Z"),
        (BasicType.CHAR, "[C"),
        (BasicType.FLOAT, "[F"),
        (BasicType.DOUBLE, "[D"),
        (BasicType.BYTE, "[B"),
        (BasicType.SHORT, "[S"),
        (BasicType.INT, "[I"),
        (BasicType.LONG, "[J"),
    ],
)
def test_registry_names(klasses, basic_type, name):
    k = for_type(basic_type)
    assert k.name == name
    assert k.element_type == basic_type
    assert k.is_array_klass()
    assert for_atype(int(basic_type)) is k


def test_non_primitive_types_have_no_array_klass(klasses):
    assert for_type(BasicType.OBJECT) is None
    assert for_atype(3) is None


def test_destroy_all_clears_registry():
    initialize_all()
    destroy_all()
    assert for_type(BasicType.INT) is None


def test_int_array_size_matches_documented_layout(klasses):
    assert for_type(BasicType.INT).array_size_in_bytes(3) == 40


def test_sizes_are_word_aligned(klasses):
    k = for_type(BasicType.BYTE)
    for length in range(20):
        size = k.array_size_in_bytes(length)
        assert size % 8 == 0
        assert size >= 24 + length


def test_allocate_and_access(klasses):
    k = for_type(BasicType.INT)
    arr = k.allocate_array(3)
    assert isinstance(arr, TypeArrayOop)
    assert arr.length == 3
    assert arr.klass is k
    assert arr.size_in_bytes == k.array_size_in_bytes(3)
    assert [arr.int_at(i) for i in range(3)] == [0, 0, 0]
    arr.int_at_put(2, -17)
    assert arr.int_at(2) == -17
    assert not arr.is_locked()
    assert arr.age() == 0


def test_empty_array(klasses):
    arr = for_type(BasicType.LONG).allocate_array(0)
    assert arr.length == 0
    with pytest.raises(IndexError):
        arr.long_at(0)


def test_negative_length_raises(klasses):
    with pytest.raises(NegativeArraySizeError):
        for_type(BasicType.INT).allocate_array(-1)


def test_length_over_limit_raises(klasses):
    k = for_type(BasicType.DOUBLE)
    with pytest.raises(ArraySizeLimitError):
        k.allocate_array(k.max_length + 1)


def test_max_length_fits_in_limit(klasses):
    for basic_type in (BasicType.BYTE, BasicType.INT, BasicType.LONG):
        k = for_type(basic_type)
        assert k.array_size_in_bytes(k.max_length) <= 2 * G


def test_internal_name_and_print():
    k = TypeArrayKlass(BasicType.SHORT, 2, "[S")
    assert k.internal_name() == "TypeArrayKlass"
    out = io.StringIO()
    k.print_on(out)
    assert out.getvalue().endswith('name="[S", element_type=9, element_size=2')