import io

import pytest

from minijvm.metadata import Metadata


class Sample(Metadata):
    def internal_name(self):
        return "Sample"


class SampleKlass(Metadata):
    def internal_name(self):
        return "SampleKlass"

    def is_klass(self):
        return True


def test_metadata_is_abstract():
    with pytest.raises(TypeError):
        Metadata()


def test_default_kind_queries():
    m = Sample()
    assert Metadata.is_metadata(m) is True
    assert Metadata.is_klass(m) is False
    assert Metadata.is_method(m) is False
    assert Metadata.is_constant_pool(m) is False


def test_subclass_keeps_inherited_defaults():
    k = SampleKlass()
    assert Metadata.is_metadata(k) is True
    assert Metadata.is_method(k) is False
    assert Metadata.is_constant_pool(k) is False
    out = io.StringIO()
    Metadata.print_on(k, out)
    assert out.getvalue().endswith("[SampleKlass]")


def test_print_on_names_kind():
    m = Sample()
    out = io.StringIO()
    Metadata.print_on(m, out)
    text = out.getvalue()
    assert text.startswith("Metadata(")
    assert text.endswith("[Sample]")
    assert hex(id(m)) in text