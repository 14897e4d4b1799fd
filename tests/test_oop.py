import io

import pytest

from minijvm.markword import MarkWord
from minijvm.oop import ArrayOop, InstanceOop, Oop, TypeArrayOop


def make_obj(size=48):
    return InstanceOop(size)


def test_header_sizes_match_layout():
    assert Oop.header_size() == 2
    assert InstanceOop.header_size() == 2
    assert InstanceOop.base_offset_in_bytes() == 16
    assert ArrayOop.length_offset_in_bytes() == 16
    assert ArrayOop.header_size_in_bytes() == 24
    assert ArrayOop.header_size() == 3
    assert ArrayOop.base_offset_in_bytes() == 24


def test_new_object_has_prototype_mark():
    obj = make_obj()
    assert obj.mark == MarkWord.prototype()
    assert obj.is_unlocked()
    assert not obj.is_locked()
    assert obj.age() == 0


def test_size_smaller_than_header_rejected():
    with pytest.raises(ValueError):
        Oop(8)
    with pytest.raises(ValueError):
        ArrayOop(16)


def test_fields_start_zeroed():
    obj = make_obj()
    assert obj.int_field(16) == 0
    assert obj.long_field(24) == 0
    assert obj.obj_field(32) is None


@pytest.mark.parametrize(
    "put,get,value",
    [
        ("byte_field_put", "byte_field", -7),
        ("char_field_put", "char_field", 65),
        ("bool_field_put", "bool_field", 1),
        ("short_field_put", "short_field", -1234),
        ("int_field_put", "int_field", 123456789),
        ("long_field_put", "long_field", -(2**40)),
        ("float_field_put", "float_field", 0.5),
        ("double_field_put", "double_field", 3.25),
    ],
)
def test_field_round_trip(put, get, value):
    obj = make_obj()
    getattr(obj, put)(24, value)
    assert getattr(obj, get)(24) == value


def test_integer_fields_wrap_like_fixed_width():
    obj = make_obj()
    obj.byte_field_put(16, 255)
    assert obj.byte_field(16) == -1
    obj.char_field_put(18, -1)
    assert obj.char_field(18) == 0xFFFF
    obj.int_field_put(20, 2**31)
    assert obj.int_field(20) == -(2**31)


def test_fields_share_bytes():
    obj = make_obj()
    obj.int_field_put(16, 0x01020304)
    assert obj.byte_field(16) == 0x04


def test_field_in_header_rejected():
    obj = make_obj()
    with pytest.raises(IndexError):
        obj.int_field(8)
    with pytest.raises(IndexError):
        obj.int_field_put(0, 1)


def test_field_past_end_rejected():
    obj = make_obj(24)
    with pytest.raises(IndexError):
        obj.long_field(20)
    with pytest.raises(IndexError):
        obj.obj_field_put(24, None)


def test_obj_field_round_trip_and_overwrite():
    obj = make_obj()
    other = make_obj()
    obj.obj_field_put(24, other)
    assert obj.obj_field(24) is other
    obj.int_field_put(28, 5)
    assert obj.obj_field(24) is None
    obj.obj_field_put(32, other)
    obj.obj_field_put(32, None)
    assert obj.obj_field(32) is None


def test_obj_field_rejects_non_object():
    obj = make_obj()
    with pytest.raises(TypeError):
        obj.obj_field_put(24, 42)


def test_incr_age_and_gc_marking():
    obj = make_obj()
    obj.incr_age()
    obj.incr_age()
    assert obj.age() == 2
    assert not obj.is_gc_marked()
    obj.mark = obj.mark.set_marked()
    assert obj.is_gc_marked()
    obj.init_mark()
    assert obj.mark == MarkWord.prototype()


def test_age_saturates():
    obj = make_obj()
    for _ in range(MarkWord.MAX_AGE + 3):
        obj.incr_age()
    assert obj.age() == MarkWord.MAX_AGE


def test_print_on():
    obj = make_obj()
    out = io.StringIO()
    obj.print_on(out)
    text = out.getvalue()
    assert text.startswith("oop(")
    assert "mark=markOop(" in text
    assert "[unlocked" in text
    assert text.endswith("klass=(nil)")


def test_print_on_without_mark():
    obj = make_obj()
    obj.mark = None
    out = io.StringIO()
    obj.print_on(out)
    assert "mark=null" in out.getvalue()


def test_array_length_round_trip():
    arr = TypeArrayOop(40, length=3)
    assert arr.length == 3
    arr.length = 2
    assert arr.int_field(ArrayOop.length_offset_in_bytes()) == 2


@pytest.mark.parametrize(
    "put,get,value",
    [
        ("byte_at_put", "byte_at", -3),
        ("char_at_put", "char_at", 0x263A),
        ("short_at_put", "short_at", -300),
        ("int_at_put", "int_at", -70000),
        ("long_at_put", "long_at", 2**50),
        ("float_at_put", "float_at", 1.5),
        ("double_at_put", "double_at", -2.75),
    ],
)
def test_array_element_round_trip(put, get, value):
    arr = TypeArrayOop(24 + 2 * 8, length=2)
    getattr(arr, put)(1, value)
    assert getattr(arr, get)(1) == value
    assert getattr(arr, get)(0) == 0


def test_int_elements_are_contiguous():
    arr = TypeArrayOop(40, length=3)
    arr.int_at_put(1, 77)
    assert arr.int_field(ArrayOop.base_offset_in_bytes() + 4) == 77


def test_array_index_out_of_range():
    arr = TypeArrayOop(40, length=3)
    with pytest.raises(IndexError):
        arr.int_at(3)
    with pytest.raises(IndexError):
        arr.int_at_put(-1, 0)