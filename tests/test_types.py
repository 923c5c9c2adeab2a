import uuid

import pytest

from ctfread.types import (
    Base,
    BitOrder,
    ByteOrder,
    CtfError,
    Encoding,
    ErrorCode,
    Uuid,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, ErrorCode.OK),
        (-1, ErrorCode.ERROR),
        (-41, ErrorCode.NOT_ENOUGH_BITS),
        (-48, ErrorCode.INVALID_METADATA_PKT),
    ],
)
def test_error_codes_match_header(value, expected):
    assert ErrorCode(value) is expected
    assert CtfError(value).code is expected


def test_error_codes_are_unique_and_negative():
    values = [code.value for code in ErrorCode]
    assert len(values) == len(set(values))
    assert all(v <= 0 for v in values)
    for code in ErrorCode:
        err = CtfError(code.value)
        assert err.code is code
        assert str(err) == code.description
        assert code.description


def test_ctf_error_defaults_to_description():
    err = CtfError(ErrorCode.MAGIC_MISMATCH)
    assert err.code is ErrorCode.MAGIC_MISMATCH
    assert str(err) == ErrorCode.MAGIC_MISMATCH.description


def test_ctf_error_accepts_int_and_message():
    err = CtfError(-45, "bad uuid")
    assert err.code is ErrorCode.UUID_MISMATCH
    assert str(err) == "bad uuid"


def test_ctf_error_rejects_unknown_code():
    with pytest.raises(ValueError):
        CtfError(-1000)


def test_enumeration_values():
    assert ByteOrder(0) is ByteOrder.LITTLE
    assert ByteOrder(1) is ByteOrder.BIG
    assert BitOrder(0) is BitOrder.FIRST_TO_LAST
    assert BitOrder(1) is BitOrder.LAST_TO_FIRST
    assert Encoding(0) is Encoding.UTF8
    assert Encoding(4) is Encoding.UTF32LE
    assert [Base(v) for v in (2, 8, 10, 16)] == list(Base)
    with pytest.raises(ValueError):
        ByteOrder(2)


@pytest.mark.parametrize("value", [e.value for e in Encoding])
def test_encoding_codec_round_trip(value):
    codec = Encoding(value).codec
    text = "You Can Fly!"
    assert text.encode(codec).decode(codec) == text


def test_uuid_round_trip():
    data = bytes(range(1, 17))
    u = Uuid.from_bytes(data)
    assert bytes(u) == data
    assert Uuid.from_bytes(bytes(u)) == u
    assert str(u) == str(uuid.UUID(bytes=data))


@pytest.mark.parametrize("length", [0, 15, 17])
def test_uuid_wrong_length(length):
    with pytest.raises(CtfError) as info:
        Uuid.from_bytes(bytes(length))
    assert info.value.code is ErrorCode.INVALID_UUID