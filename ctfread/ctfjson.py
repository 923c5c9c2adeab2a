"""Conversion of JSON values into field classes and fields.

Used to give uniform access to environments, attributes and extensions:

- null    -> nil class / nil field
- boolean -> fixed-length boolean (1 bit) / bool field
- float   -> fixed-length float (64 bits) / real field
- int >= 0 -> fixed-length unsigned integer (64 bits) / uint field
- int < 0  -> fixed-length signed integer (64 bits) / sint field
- object  -> structure / struct field
- array   -> structure with members "0", "1", ... / struct field
- string  -> null-terminated UTF-8 string / str field
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from ctfread.fields import (
    DEFAULT_ALIGNMENT,
    DEFAULT_DISPLAY_BASE,
    Field,
    FieldClass,
    FieldClassType,
    FieldType,
    StructMemberClass,
)
from ctfread.types import CtfError, Encoding, ErrorCode

_INT64_MIN = -(1 << 63)
_UINT64_MAX = (1 << 64) - 1

_INT_CLASSES = {
    FieldClassType.FXD_LEN_UINT,
    FieldClassType.FXD_LEN_SINT,
    FieldClassType.VAR_LEN_UINT,
    FieldClassType.VAR_LEN_SINT,
}
_SINT_CLASSES = {FieldClassType.FXD_LEN_SINT, FieldClassType.VAR_LEN_SINT}
_STR_CLASSES = {
    FieldClassType.NULL_TERM_STR,
    FieldClassType.STATIC_LEN_STR,
    FieldClassType.DYN_LEN_STR,
}


class CtfJsonError(CtfError):
    """A JSON value could not be converted."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL) -> None:
        super().__init__(code, message)


@dataclass(eq=False)
class CtfJson:
    """A JSON document as a field class (its schema) and a field (its values)."""

    field_class: FieldClass
    root: Field


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "double"
    if isinstance(value, int):
        return "int"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    raise CtfJsonError(
        f"unrecognized JSON type {type(value).__name__}", ErrorCode.JSON_WRONG_TYPE
    )


def _check_int(value: int) -> None:
    if not _INT64_MIN <= value <= _UINT64_MAX:
        raise CtfJsonError(f"integer {value} does not fit in 64 bits", ErrorCode.JSON_ERROR)


def field_class_from_json(value: Any) -> FieldClass:
    """Build the field class describing the JSON ``value``."""
    kind = _json_type_name(value)
    if kind == "null":
        return FieldClass(FieldClassType.NIL)
    if kind == "boolean":
        return FieldClass(FieldClassType.FXD_LEN_BOOL, length=1, alignment=DEFAULT_ALIGNMENT)
    if kind == "double":
        return FieldClass(FieldClassType.FXD_LEN_FLOAT, length=64, alignment=DEFAULT_ALIGNMENT)
    if kind == "int":
        _check_int(value)
        ctype = FieldClassType.FXD_LEN_SINT if value < 0 else FieldClassType.FXD_LEN_UINT
        return FieldClass(ctype, length=64, alignment=DEFAULT_ALIGNMENT, base=DEFAULT_DISPLAY_BASE)
    if kind == "object":
        members = [StructMemberClass(name, field_class_from_json(v)) for name, v in value.items()]
        return FieldClass(FieldClassType.STRUCT, alignment=DEFAULT_ALIGNMENT, members=members)
    if kind == "array":
        # Array items may differ in type, so they become struct members named by index.
        members = [StructMemberClass(str(i), field_class_from_json(v)) for i, v in enumerate(value)]
        return FieldClass(FieldClassType.STRUCT, alignment=DEFAULT_ALIGNMENT, members=members)
    return FieldClass(FieldClassType.NULL_TERM_STR, encoding=Encoding.UTF8)


def _incompatible(fc: FieldClass, kind: str) -> CtfJsonError:
    return CtfJsonError(f'incompatible field-class "{fc.type.type_name}" for JSON {kind}')


def field_from_json(value: Any, field_class: FieldClass, parent: Optional[Field] = None) -> Field:
    """Build the field holding JSON ``value`` as described by ``field_class``."""
    kind = _json_type_name(value)
    fc = field_class
    if kind == "null":
        if fc.type is not FieldClassType.NIL:
            raise _incompatible(fc, kind)
        return Field(FieldType.NIL, fc, None, parent=parent)
    if kind == "boolean":
        if fc.type is not FieldClassType.FXD_LEN_BOOL:
            raise _incompatible(fc, kind)
        return Field(FieldType.BOOL, fc, value, parent=parent)
    if kind == "double":
        if fc.type is not FieldClassType.FXD_LEN_FLOAT:
            raise _incompatible(fc, kind)
        return Field(FieldType.REAL, fc, value, parent=parent)
    if kind == "int":
        if fc.type not in _INT_CLASSES:
            raise _incompatible(fc, kind)
        _check_int(value)
        if fc.type in _SINT_CLASSES:
            if value > (1 << 63) - 1:
                raise CtfJsonError(f"integer {value} does not fit a signed class", ErrorCode.JSON_ERROR)
            return Field(FieldType.SINT, fc, value, parent=parent)
        if value < 0:
            raise CtfJsonError(f"integer {value} does not fit an unsigned class", ErrorCode.JSON_ERROR)
        return Field(FieldType.UINT, fc, value, parent=parent)
    if kind in ("object", "array"):
        if fc.type is not FieldClassType.STRUCT:
            raise _incompatible(fc, kind)
        if len(value) != len(fc.members):
            raise CtfJsonError(
                f"field-class has {len(fc.members)} members while json object has {len(value)} members"
            )
        node = Field(FieldType.STRUCT, fc, parent=parent)
        if kind == "object":
            for i, ((name, item), mfc) in enumerate(zip(value.items(), fc.members)):
                if name != mfc.name:
                    raise CtfJsonError(
                        f"field-class has key {mfc.name} in index {i} but JSON object has key {name}"
                    )
                node.members.append(field_from_json(item, mfc.cls, node))
        else:
            for item, mfc in zip(value, fc.members):
                node.members.append(field_from_json(item, mfc.cls, node))
        return node
    if fc.type not in _STR_CLASSES:
        raise _incompatible(fc, kind)
    return Field(FieldType.STR, fc, value.encode("utf-8") + b"\0", parent=parent)


def ctfjson_from_json(value: Any) -> CtfJson:
    """Convert a decoded JSON value into its field class and field."""
    fc = field_class_from_json(value)
    return CtfJson(fc, field_from_json(value, fc, None))


def ctfjson_from_text(text: Union[str, bytes]) -> CtfJson:
    """Parse JSON text and convert it."""
    try:
        value = json.loads(text)
    except ValueError as exc:
        raise CtfJsonError(f"invalid JSON: {exc}", ErrorCode.JSON_PARSE_ERROR) from exc
    return ctfjson_from_json(value)