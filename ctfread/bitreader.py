"""Bit reader over an in-memory buffer in either byte order.

Bits are staged in a 64-bit lookahead word that is refilled a few bytes
at a time. In little-endian order the next bit to read is the least
significant bit of the lookahead; in big-endian order it is the most
significant one. At most 56 bits can be read in one call.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from ctfread.types import ByteOrder, CtfError, ErrorCode

MAX_READ_BITS = 56

_U64 = (1 << 64) - 1
UINT64_MAX = _U64

Buffer = Union[bytes, bytearray, memoryview]


def bswap64(value: int) -> int:
    """Reverse the byte order of a 64-bit value."""
    return int.from_bytes((value & _U64).to_bytes(8, "little"), "big")


def bswap32(value: int) -> int:
    """Reverse the byte order of a 32-bit value."""
    return int.from_bytes((value & 0xFFFFFFFF).to_bytes(4, "little"), "big")


def bswap16(value: int) -> int:
    """Reverse the byte order of a 16-bit value."""
    return int.from_bytes((value & 0xFFFF).to_bytes(2, "little"), "big")


def saturating_add_u64(a: int, b: int) -> int:
    """Add two unsigned 64-bit values, clamping at the 64-bit maximum."""
    return min((a & _U64) + (b & _U64), _U64)


class SeekFrom(IntEnum):
    """Reference point for :meth:`BitReader.seek`."""

    SET = 0
    CUR = 1
    END = 2


class BitReader:
    """Reads bit fields from ``data`` in the given byte order."""

    def __init__(self, data: Buffer, byte_order: ByteOrder = ByteOrder.LITTLE) -> None:
        self._data = memoryview(data).cast("B")
        self._end = len(self._data)
        self._pos = 0
        self._bo = ByteOrder(byte_order)
        self._lookahead = 0
        self._la_cnt = 0
        self._tot = 0

    @property
    def byte_order(self) -> ByteOrder:
        return self._bo

    @property
    def bit_position(self) -> int:
        """Number of bits consumed since the start of the buffer."""
        return self._tot

    @property
    def lookahead_bits(self) -> int:
        """Number of bits currently staged and readable without a refill."""
        return self._la_cnt

    def set_byte_order(self, byte_order: ByteOrder) -> None:
        """Switch byte order, keeping the staged bits."""
        byte_order = ByteOrder(byte_order)
        if byte_order is self._bo:
            return
        self._lookahead = bswap64(self._lookahead)
        self._bo = byte_order

    def peek(self, count: int) -> int:
        """Return the next ``count`` staged bits without consuming them."""
        if not 0 <= count <= self._la_cnt:
            raise ValueError(f"cannot peek {count} bits, {self._la_cnt} staged")
        if self._bo is ByteOrder.LITTLE:
            return self._lookahead & ((1 << count) - 1)
        return self._lookahead >> (64 - count)

    def consume(self, count: int) -> None:
        """Drop ``count`` staged bits; they must already be staged."""
        if not 0 <= count <= self._la_cnt:
            raise ValueError(f"cannot consume {count} bits, {self._la_cnt} staged")
        if self._bo is ByteOrder.LITTLE:
            self._lookahead >>= count
        else:
            self._lookahead = (self._lookahead << count) & _U64
        self._la_cnt -= count
        self._tot += count

    def consume_checked(self, count: int) -> None:
        """Skip ``count`` bits, stopping at the end of the buffer."""
        if count < 0:
            raise ValueError("cannot consume a negative number of bits")
        if count <= self._la_cnt:
            self.consume(count)
            return
        to_consume = count - self._la_cnt
        self.consume(self._la_cnt)
        self._lookahead = 0
        whole_bytes = to_consume >> 3
        avail = self._end - self._pos
        if avail <= whole_bytes:
            self._pos += avail
            self._tot += avail * 8
        else:
            self._pos += whole_bytes
            self._tot += whole_bytes * 8
            self.refill()
            self.consume(to_consume & 0x7)

    def refill(self) -> int:
        """Stage as many whole bytes as fit; return the number of staged bits."""
        cnt = self._la_cnt
        remaining = self._end - self._pos
        little = self._bo is ByteOrder.LITTLE
        if remaining >= 8:
            chunk = self._data[self._pos:self._pos + 8]
            used = (63 - cnt) >> 3
            new_cnt = cnt | MAX_READ_BITS
        else:
            chunk = bytes(self._data[self._pos:self._end]) + bytes(8 - remaining)
            used = min(remaining, (63 - cnt) >> 3)
            new_cnt = cnt + used * 8
        if little:
            self._lookahead |= (int.from_bytes(chunk, "little") << cnt) & _U64
        else:
            self._lookahead |= int.from_bytes(chunk, "big") >> cnt
        self._pos += used
        self._la_cnt = new_cnt
        return self._la_cnt

    def byte_aligned(self) -> bool:
        """Return True if the staged bits are a whole number of bytes."""
        return self._la_cnt % 8 == 0

    def align(self, alignment: int) -> None:
        """Skip bits until the bit position is a multiple of ``alignment``."""
        if alignment <= 0 or alignment & (alignment - 1):
            raise ValueError(f"alignment must be a power of two, got {alignment}")
        target = (self._tot + alignment - 1) & -alignment
        self.consume_checked(target - self._tot)

    def bits_remaining(self) -> int:
        """Number of bits that can still be read."""
        return (self._end - self._pos) * 8 + self._la_cnt

    def has_bits_remaining(self) -> bool:
        """Return True if any bit can still be read."""
        return self._la_cnt > 0 or self._pos < self._end

    def bytes_remaining(self) -> int:
        """Number of whole bytes that can still be read."""
        return (self._end - self._pos) + (self._la_cnt >> 3)

    def peek_bytes(self) -> memoryview:
        """Return a view of the buffer starting at the current byte."""
        return self._data[self._pos - (self._la_cnt >> 3):]

    def read_bits(self, count: int) -> int:
        """Read ``count`` bits (at most 56) as an unsigned integer."""
        if not 0 <= count <= MAX_READ_BITS:
            raise ValueError(f"can read at most {MAX_READ_BITS} bits at once, asked for {count}")
        if self._la_cnt < count and self.refill() < count:
            raise CtfError(
                ErrorCode.NOT_ENOUGH_BITS,
                f"cannot read {count} bits, {self._la_cnt} available",
            )
        value = self.peek(count)
        self.consume(count)
        return value

    def read_bit(self) -> int:
        """Read a single bit."""
        return self.read_bits(1)

    def read_bytes(self, count: int) -> memoryview:
        """Read ``count`` whole bytes; the reader must be byte aligned."""
        if not self.byte_aligned():
            raise ValueError("reader is not byte aligned")
        if count < 0:
            raise ValueError("cannot read a negative number of bytes")
        if self.bytes_remaining() < count:
            raise CtfError(
                ErrorCode.NOT_ENOUGH_BITS,
                f"cannot read {count} bytes, {self.bytes_remaining()} available",
            )
        start = self._pos - (self._la_cnt >> 3)
        self.consume_checked(count * 8)
        return self._data[start:start + count]

    def seek(self, offset: int, whence: SeekFrom = SeekFrom.SET) -> None:
        """Move to a byte offset, clamped to the end of the buffer."""
        if offset < 0:
            raise ValueError("seek offset must not be negative")
        whence = SeekFrom(whence)
        if whence is SeekFrom.SET:
            self._pos = offset if offset < self._end else self._end
        elif whence is SeekFrom.CUR:
            if offset < self._end - self._pos:
                self._pos += offset
            else:
                self._pos = self._end
        else:
            self._pos = self._end
        self._tot = self._pos * 8
        self._lookahead = 0
        self._la_cnt = 0