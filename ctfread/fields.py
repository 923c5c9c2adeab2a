"""Field classes and decoded field values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from ctfread.types import Base, CtfError, Encoding, ErrorCode

DEFAULT_ALIGNMENT = 1
DEFAULT_DISPLAY_BASE = Base.DECIMAL


class FieldType(Enum):
    """Kinds of decoded field values."""

    NIL = "nil"
    BOOL = "bool"
    UINT = "uint"
    SINT = "sint"
    BIT_MAP = "bit-map"
    REAL = "real"
    STR = "str"
    BLOB = "blob"
    ARR = "array"
    STRUCT = "struct"


class FieldClassType(Enum):
    """Kinds of field classes; the value is the class type name."""

    NIL = "nil"
    FXD_LEN_BIT_ARR = "fixed-length-bit-array"
    FXD_LEN_BIT_MAP = "fixed-length-bit-map"
    FXD_LEN_UINT = "fixed-length-unsigned-integer"
    FXD_LEN_SINT = "fixed-length-signed-integer"
    FXD_LEN_BOOL = "fixed-length-boolean"
    FXD_LEN_FLOAT = "fixed-length-floating-point-number"
    VAR_LEN_UINT = "variable-length-unsigned-integer"
    VAR_LEN_SINT = "variable-length-signed-integer"
    NULL_TERM_STR = "null-terminated-string"
    STATIC_LEN_STR = "static-length-string"
    STATIC_LEN_BLOB = "static-length-blob"
    DYN_LEN_STR = "dynamic-length-string"
    DYN_LEN_BLOB = "dynamic-length-blob"
    STRUCT = "structure"
    STATIC_LEN_ARR = "static-length-array"
    DYN_LEN_ARR = "dynamic-length-array"
    OPTIONAL = "optional"
    VARIANT = "variant"

    @property
    def type_name(self) -> str:
        return self.value


@dataclass(eq=False)
class StructMemberClass:
    """A named member of a structure field class."""

    name: str
    cls: "FieldClass"
    attributes: Any = None
    extensions: Any = None


@dataclass(eq=False)
class FieldClass:
    """Describes how a field is laid out and interpreted."""

    type: FieldClassType
    length: Optional[int] = None
    alignment: int = DEFAULT_ALIGNMENT
    base: Optional[Base] = None
    encoding: Optional[Encoding] = None
    members: List[StructMemberClass] = field(default_factory=list)
    alias: Optional[str] = None
    attributes: Any = None
    extensions: Any = None


@dataclass(eq=False)
class Field:
    """A decoded field value together with its class and enclosing struct.

    ``value`` holds a bool, int, float or bytes depending on ``type``;
    string bytes include the terminating NUL when one was present.
    Structure fields keep their member fields in ``members``.
    """

    type: FieldType
    cls: Optional[FieldClass] = None
    value: Any = None
    members: List["Field"] = field(default_factory=list)
    parent: Optional["Field"] = field(default=None, repr=False)

    def _require(self, ftype: FieldType) -> None:
        if self.type is not ftype:
            raise CtfError(
                ErrorCode.WRONG_FLD_TYPE,
                f"expected a {ftype.value} field, got a {self.type.value} field",
            )

    def struct_len(self) -> int:
        """Number of members of a structure field."""
        self._require(FieldType.STRUCT)
        return len(self.members)

    def struct_field(self, index: int) -> "Field":
        """The member field at ``index``."""
        self._require(FieldType.STRUCT)
        if not 0 <= index < len(self.members):
            raise IndexError(f"struct member index {index} out of range")
        return self.members[index]

    def struct_field_name(self, index: int) -> str:
        """The name of the member at ``index``."""
        self._require(FieldType.STRUCT)
        if self.cls is None:
            raise CtfError(ErrorCode.INTERNAL, "structure field has no class")
        if not 0 <= index < len(self.cls.members):
            raise IndexError(f"struct member index {index} out of range")
        return self.cls.members[index].name

    def struct_field_by_name(self, name: str) -> "Field":
        """The member field called ``name``; raise KeyError if absent."""
        self._require(FieldType.STRUCT)
        if self.cls is not None:
            for member_cls, member in zip(self.cls.members, self.members):
                if member_cls.name == name:
                    return member
        raise KeyError(name)

    def as_str(self) -> str:
        """Decode a string field, stopping at the first NUL character."""
        self._require(FieldType.STR)
        encoding = Encoding.UTF8
        if self.cls is not None and self.cls.encoding is not None:
            encoding = self.cls.encoding
        text = bytes(self.value or b"").decode(encoding.codec)
        nul = text.find("\0")
        return text if nul < 0 else text[:nul]