"""Basic types shared by the reader: error codes, byte orders, encodings, UUIDs."""

from __future__ import annotations

import uuid as _uuid
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

UUID_N_BYTES = 16


class ErrorCode(IntEnum):
    """Result codes; every code below zero describes a failure."""

    OK = 0
    ERROR = -1
    INTERNAL = -2
    OOM = -3
    NOT_FOUND = -4
    JSON_PARSE_ERROR = -5
    JSON_ERROR = -6
    JSON_WRONG_TYPE = -7
    JSON_NOT_GTEZ = -8
    JSON_NOT_GTZ = -9
    INVALID_ALIGNMENT = -10
    INVALID_BYTE_ORDER = -11
    INVALID_BIT_ORDER = -12
    INVALID_RANGE = -13
    INVALID_RANGE_SET = -14
    INVALID_UUID = -15
    INVALID_MAPPING = -16
    INVALID_FLD_LOC = -17
    INVALID_FLD_CLS = -18
    INVALID_FLAGS = -19
    INVALID_ROLE = -20
    INVALID_BASE = -21
    UNSUPPORTED_LENGTH = -22
    INVALID_ENCODING = -23
    INVALID_ENVIRONMENT = -24
    INVALID_VARIANT = -25
    CC_GTE_FREQ_ERROR = -26
    NO_SUCH_ALIAS = -27
    MISSING_PROPERTY = -28
    UNSUPPORTED_EXTENSION = -29
    NO_SUCH_ORIGIN = -30
    NO_DEFAULT_CLOCK = -31
    INVALID_UUID_ROLE = -32
    INVALID_MAGIC_ROLE = -33
    NOT_A_STRUCT = -34
    DUPLICATE_ERROR = -35
    NO_SUCH_ID = -36
    UNSUPPORTED_VERSION = -37
    NO_PREAMBLE = -38
    WRONG_FLD_TYPE = -39
    MISSING_FLD_LOC = -40
    NOT_ENOUGH_BITS = -41
    MID_BYTE_ENDIAN_SWAP = -42
    INVALID_STR_LEN = -43
    MAGIC_MISMATCH = -44
    UUID_MISMATCH = -45
    NO_SELECTOR_FLD = -46
    INVALID_CONTENT_LEN = -47
    INVALID_METADATA_PKT = -48

    @property
    def description(self) -> str:
        """A short human-readable explanation of the code."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorCode.OK: "OK",
    ErrorCode.ERROR: "Error",
    ErrorCode.INTERNAL: "Internal logic error",
    ErrorCode.OOM: "Failed to allocate memory",
    ErrorCode.NOT_FOUND: "The queried property does not exist",
    ErrorCode.JSON_PARSE_ERROR: "An error occurred when parsing the JSON data",
    ErrorCode.JSON_ERROR: "Incompatible JSON content",
    ErrorCode.JSON_WRONG_TYPE: "A JSON object is of the wrong type",
    ErrorCode.JSON_NOT_GTEZ: "A value is not greater than or equal to zero",
    ErrorCode.JSON_NOT_GTZ: "A value is not greater than zero",
    ErrorCode.INVALID_ALIGNMENT: "An alignment is not a power of two",
    ErrorCode.INVALID_BYTE_ORDER: "An invalid byte order is specified",
    ErrorCode.INVALID_BIT_ORDER: "An invalid bit order is specified",
    ErrorCode.INVALID_RANGE: "An invalid range is specified",
    ErrorCode.INVALID_RANGE_SET: "An invalid range set is specified",
    ErrorCode.INVALID_UUID: "An invalid uuid is specified",
    ErrorCode.INVALID_MAPPING: "An invalid mapping is specified",
    ErrorCode.INVALID_FLD_LOC: "An invalid field location is specified",
    ErrorCode.INVALID_FLD_CLS: "An invalid field class is specified",
    ErrorCode.INVALID_FLAGS: "An invalid set of bit map field class flags is specified",
    ErrorCode.INVALID_ROLE: "An invalid role is specified",
    ErrorCode.INVALID_BASE: "An invalid base is specified",
    ErrorCode.UNSUPPORTED_LENGTH: "An invalid or unsupported length is specified",
    ErrorCode.INVALID_ENCODING: "An invalid encoding is specified",
    ErrorCode.INVALID_ENVIRONMENT: "An invalid environment is specified",
    ErrorCode.INVALID_VARIANT: "An invalid variant is specified",
    ErrorCode.CC_GTE_FREQ_ERROR: (
        "The cycle offset is greater than or equal to the frequency of a clock class"
    ),
    ErrorCode.NO_SUCH_ALIAS: "Referring to an alias which does not exist",
    ErrorCode.MISSING_PROPERTY: "A required property is not available",
    ErrorCode.UNSUPPORTED_EXTENSION: "An extension is enabled which is not supported",
    ErrorCode.NO_SUCH_ORIGIN: "A clock origin which does not exist is specified",
    ErrorCode.NO_DEFAULT_CLOCK: (
        "A default-clock-timestamp role is specified without the data-stream having a default clock"
    ),
    ErrorCode.INVALID_UUID_ROLE: 'A "metadata-stream-uuid" role is specified, but it is invalid',
    ErrorCode.INVALID_MAGIC_ROLE: 'A "packet-magic-number" role is specified, but it is invalid',
    ErrorCode.NOT_A_STRUCT: "A field class which is required to be a struct is in fact not a struct",
    ErrorCode.DUPLICATE_ERROR: "A duplicate of an id, name or field class is specified in the metadata",
    ErrorCode.NO_SUCH_ID: "An id referring to a field class is specified but no such id exists",
    ErrorCode.UNSUPPORTED_VERSION: "The metadata stream has an unsupported version",
    ErrorCode.NO_PREAMBLE: "No preamble is specified",
    ErrorCode.WRONG_FLD_TYPE: "Wrong type of field",
    ErrorCode.MISSING_FLD_LOC: "Field location is not found",
    ErrorCode.NOT_ENOUGH_BITS: "Trying to read more bits than what's available in the packet",
    ErrorCode.MID_BYTE_ENDIAN_SWAP: "The byte-order is changed in the middle of a byte",
    ErrorCode.INVALID_STR_LEN: (
        "A string length is encountered which is not compatible with its encoding"
    ),
    ErrorCode.MAGIC_MISMATCH: "The packet magic number is incorrect",
    ErrorCode.UUID_MISMATCH: "The data stream UUID does not match the metadata UUID",
    ErrorCode.NO_SELECTOR_FLD: "A selector field is not found for an optional or variant",
    ErrorCode.INVALID_CONTENT_LEN: "A packet's content length is larger than total length of packet",
    ErrorCode.INVALID_METADATA_PKT: "A metadata packet is invalid",
}


class CtfError(Exception):
    """An error carrying an :class:`ErrorCode`."""

    def __init__(self, code: Union[ErrorCode, int], message: Optional[str] = None) -> None:
        self.code = ErrorCode(code)
        self.message = message if message is not None else self.code.description
        super().__init__(self.message)


class ByteOrder(IntEnum):
    """Byte orders."""

    LITTLE = 0
    BIG = 1


class BitOrder(IntEnum):
    """Bit orders."""

    FIRST_TO_LAST = 0
    LAST_TO_FIRST = 1


class Encoding(IntEnum):
    """Character encodings."""

    UTF8 = 0
    UTF16BE = 1
    UTF16LE = 2
    UTF32BE = 3
    UTF32LE = 4

    @property
    def codec(self) -> str:
        """The name of the matching Python codec."""
        return _CODECS[self]


_CODECS = {
    Encoding.UTF8: "utf-8",
    Encoding.UTF16BE: "utf-16-be",
    Encoding.UTF16LE: "utf-16-le",
    Encoding.UTF32BE: "utf-32-be",
    Encoding.UTF32LE: "utf-32-le",
}


class Base(IntEnum):
    """Preferred display bases."""

    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16


@dataclass(frozen=True)
class Uuid:
    """A 16-byte UUID."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != UUID_N_BYTES:
            raise CtfError(
                ErrorCode.INVALID_UUID,
                f"a UUID holds {UUID_N_BYTES} bytes, got {len(self.data)}",
            )

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> "Uuid":
        """Build a UUID from exactly 16 bytes."""
        return cls(bytes(data))

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return str(_uuid.UUID(bytes=self.data))