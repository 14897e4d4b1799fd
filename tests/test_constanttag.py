import pytest

from minijvm.constanttag import ConstantTag, ConstantTagValue as T

QUERIES = [
    ("is_klass", T.CLASS),
    ("is_field", T.FIELDREF),
    ("is_method", T.METHODREF),
    ("is_interface_method", T.INTERFACE_METHODREF),
    ("is_string", T.STRING),
    ("is_int", T.INTEGER),
    ("is_float", T.FLOAT),
    ("is_long", T.LONG),
    ("is_double", T.DOUBLE),
    ("is_name_and_type", T.NAME_AND_TYPE),
    ("is_utf8", T.UTF8),
    ("is_method_handle", T.METHOD_HANDLE),
    ("is_method_type", T.METHOD_TYPE),
    ("is_dynamic_constant", T.DYNAMIC),
    ("is_invoke_dynamic", T.INVOKE_DYNAMIC),
    ("is_invalid", T.INVALID),
    ("is_unresolved_klass", T.UNRESOLVED_CLASS),
    ("is_klass_index", T.CLASS_INDEX),
    ("is_string_index", T.STRING_INDEX),
]


@pytest.mark.parametrize("name,tag", QUERIES)
def test_each_query_matches_only_its_tag(name, tag):
    for _, other in QUERIES:
        assert getattr(ConstantTag(other), name)() is (other == tag)


def test_default_tag_is_invalid():
    assert ConstantTag().is_invalid() is True
    assert ConstantTag().value == T.INVALID


def test_spec_tag_values():
    assert ConstantTag(1).is_utf8() is True
    assert ConstantTag(T.EXTERNAL_MAX).is_invoke_dynamic() is True
    assert ConstantTag(T.INTERNAL_MIN).is_unresolved_klass() is True


@pytest.mark.parametrize(
    "tag,text",
    [
        (T.INVALID, "Invalid"),
        (T.UTF8, "Utf8"),
        (T.INTEGER, "Integer"),
        (T.FLOAT, "Float"),
        (T.LONG, "Long"),
        (T.DOUBLE, "Double"),
        (T.CLASS, "Class"),
        (T.STRING, "String"),
        (T.FIELDREF, "Fieldref"),
        (T.METHODREF, "Methodref"),
        (T.INTERFACE_METHODREF, "InterfaceMethodref"),
        (T.NAME_AND_TYPE, "NameAndType"),
        (T.METHOD_HANDLE, "MethodHandle"),
        (T.METHOD_TYPE, "MethodType"),
        (T.DYNAMIC, "Dynamic"),
        (T.INVOKE_DYNAMIC, "InvokeDynamic"),
        (T.UNRESOLVED_CLASS, "UnresolvedClass"),
        (T.CLASS_INDEX, "ClassIndex"),
        (T.STRING_INDEX, "StringIndex"),
    ],
)
def test_to_string(tag, text):
    assert ConstantTag(tag).to_string() == text
    assert str(ConstantTag(tag)) == text


@pytest.mark.parametrize("tag", [T.UNICODE, T.UNRESOLVED_CLASS_IN_ERROR, 13, 55])
def test_unnamed_tags_are_unknown(tag):
    assert ConstantTag(tag).to_string() == "Unknown"


def test_double_slot():
    slots = {tag for tag in T if ConstantTag(tag).is_double_slot()}
    assert slots == {T.LONG, T.DOUBLE}


def test_klass_or_reference():
    refs = {tag for tag in T if ConstantTag(tag).is_klass_or_reference()}
    assert refs == {T.CLASS, T.UNRESOLVED_CLASS, T.CLASS_INDEX}


def test_tags_compare_by_value():
    assert ConstantTag(T.STRING) == ConstantTag(int(T.STRING))
    assert ConstantTag(T.STRING) != ConstantTag(T.UTF8)