import pytest

from ctfread.ctfjson import (
    CtfJson,
    CtfJsonError,
    ctfjson_from_json,
    ctfjson_from_text,
    field_class_from_json,
    field_from_json,
)
from ctfread.fields import FieldClass, FieldClassType, FieldType
from ctfread.types import ErrorCode

EXTENSIONS = """
{
  "my.tracer": {"piano": {"keys": 88, "temperament": "equal"}, "ramen": -23},
  "abc/xyz": {"sax": {"variant": "alto"}}
}
"""

ATTRIBUTES = """
{
  "my.tracer": {"max-count": 45, "module": "sys"},
  "abc/xyz": true
}
"""

TYPES = """
{
  "json_type_null": null,
  "json_type_boolean": false,
  "json_type_double": 13.37,
  "json_type_uint": 42,
  "json_type_sint": -42,
  "json_type_object": {},
  "json_type_array": [12, "12"],
  "json_type_string": ""
}
"""


def test_extensions():
    j = ctfjson_from_text(EXTENSIONS)
    root = j.root
    assert root.type is FieldType.STRUCT
    assert root.struct_len() == 2

    mytracer = root.struct_field(0)
    assert root.struct_field_name(0) == "my.tracer"
    assert mytracer.type is FieldType.STRUCT
    assert mytracer.struct_len() == 2

    piano = mytracer.struct_field(0)
    assert mytracer.struct_field_name(0) == "piano"
    assert piano.type is FieldType.STRUCT
    assert piano.struct_len() == 2
    keys = piano.struct_field(0)
    assert piano.struct_field_name(0) == "keys"
    assert keys.type is FieldType.UINT
    assert keys.value == 88
    temperament = piano.struct_field(1)
    assert piano.struct_field_name(1) == "temperament"
    assert temperament.type is FieldType.STR
    assert temperament.as_str() == "equal"

    ramen = mytracer.struct_field(1)
    assert mytracer.struct_field_name(1) == "ramen"
    assert ramen.type is FieldType.SINT
    assert ramen.value == -23

    abcxyz = root.struct_field(1)
    assert root.struct_field_name(1) == "abc/xyz"
    assert abcxyz.type is FieldType.STRUCT
    assert abcxyz.struct_len() == 1
    sax = abcxyz.struct_field(0)
    assert abcxyz.struct_field_name(0) == "sax"
    assert sax.type is FieldType.STRUCT
    assert sax.struct_len() == 1
    variant = sax.struct_field(0)
    assert sax.struct_field_name(0) == "variant"
    assert variant.type is FieldType.STR
    assert variant.as_str() == "alto"


def test_attributes():
    root = ctfjson_from_text(ATTRIBUTES).root
    assert root.type is FieldType.STRUCT
    assert root.struct_len() == 2
    mytracer = root.struct_field(0)
    assert root.struct_field_name(0) == "my.tracer"
    assert mytracer.struct_len() == 2
    maxcount = mytracer.struct_field(0)
    assert mytracer.struct_field_name(0) == "max-count"
    assert maxcount.type is FieldType.UINT
    assert maxcount.value == 45
    module = mytracer.struct_field(1)
    assert mytracer.struct_field_name(1) == "module"
    assert module.type is FieldType.STR
    assert module.as_str() == "sys"
    abcxyz = root.struct_field(1)
    assert root.struct_field_name(1) == "abc/xyz"
    assert abcxyz.type is FieldType.BOOL
    assert abcxyz.value is True


def test_types():
    root = ctfjson_from_text(TYPES).root
    assert root.type is FieldType.STRUCT
    assert root.struct_len() == 8
    names = [root.struct_field_name(i) for i in range(8)]
    assert names == [
        "json_type_null", "json_type_boolean", "json_type_double", "json_type_uint",
        "json_type_sint", "json_type_object", "json_type_array", "json_type_string",
    ]
    assert root.struct_field(0).type is FieldType.NIL
    assert root.struct_field(1).type is FieldType.BOOL
    assert root.struct_field(1).value is False
    assert root.struct_field(2).type is FieldType.REAL
    assert root.struct_field(2).value == pytest.approx(13.37, abs=0.0001)
    assert root.struct_field(3).type is FieldType.UINT
    assert root.struct_field(3).value == 42
    assert root.struct_field(4).type is FieldType.SINT
    assert root.struct_field(4).value == -42
    obj = root.struct_field(5)
    assert obj.type is FieldType.STRUCT
    assert obj.struct_len() == 0
    arr = root.struct_field(6)
    assert arr.type is FieldType.STRUCT
    assert arr.struct_len() == 2
    assert arr.struct_field(0).type is FieldType.UINT
    assert arr.struct_field(0).value == 12
    assert arr.struct_field(1).type is FieldType.STR
    assert arr.struct_field(1).as_str() == "12"
    s = root.struct_field(7)
    assert s.type is FieldType.STR
    assert s.as_str() == ""


def test_array_member_names_and_parents():
    j = ctfjson_from_json([1, "x", None])
    assert isinstance(j, CtfJson)
    assert [j.root.struct_field_name(i) for i in range(3)] == ["0", "1", "2"]
    assert all(j.root.struct_field(i).parent is j.root for i in range(3))
    assert j.root.parent is None


def test_class_shapes():
    assert field_class_from_json(True).type is FieldClassType.FXD_LEN_BOOL
    assert field_class_from_json(True).length == 1
    assert field_class_from_json(1.5).length == 64
    assert field_class_from_json(-1).type is FieldClassType.FXD_LEN_SINT
    assert field_class_from_json(0).type is FieldClassType.FXD_LEN_UINT
    assert field_class_from_json("s").type is FieldClassType.NULL_TERM_STR


def test_string_keeps_terminator():
    f = ctfjson_from_json("abc").root
    assert f.value == b"abc\0"


def test_incompatible_class():
    with pytest.raises(CtfJsonError) as exc:
        field_from_json("text", FieldClass(FieldClassType.FXD_LEN_UINT))
    assert exc.value.code is ErrorCode.INTERNAL
    assert "string" in str(exc.value)


def test_member_count_mismatch():
    fc = field_class_from_json({"a": 1})
    with pytest.raises(CtfJsonError):
        field_from_json({"a": 1, "b": 2}, fc)


def test_member_name_mismatch():
    fc = field_class_from_json({"a": 1})
    with pytest.raises(CtfJsonError) as exc:
        field_from_json({"b": 1}, fc)
    assert "index 0" in str(exc.value)


def test_parse_error():
    with pytest.raises(CtfJsonError) as exc:
        ctfjson_from_text("{not json")
    assert exc.value.code is ErrorCode.JSON_PARSE_ERROR


def test_unrecognized_type():
    with pytest.raises(CtfJsonError) as exc:
        field_class_from_json({1, 2})
    assert exc.value.code is ErrorCode.JSON_WRONG_TYPE


def test_reused_class_round_trip():
    fc = field_class_from_json({"k": [1, -2]})
    f = field_from_json({"k": [5, -7]}, fc)
    inner = f.struct_field_by_name("k")
    assert inner.struct_field(0).value == 5
    assert inner.struct_field(1).value == -7
    assert inner.struct_field(1).type is FieldType.SINT