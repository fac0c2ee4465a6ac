"""Byte-level reading and writing of protocol packets, including variable-length integers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Iterator


class EncodeError(Exception):
    """A value could not be written to a packet."""


class DecodeError(Exception):
    """A value could not be read from a packet."""


class EndOfBufferError(DecodeError):
    """The packet ended before the value was complete."""

    def __init__(self, message: str = "end of buffer") -> None:
        super().__init__(message)


class InvalidDataError(DecodeError):
    """The packet holds bytes that do not form a valid value."""


_U8 = struct.Struct(">B")
_I16 = struct.Struct(">h")
_U16 = struct.Struct(">H")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")
_U64 = struct.Struct(">Q")
_F32 = struct.Struct(">f")
_F64 = struct.Struct(">d")


def _wrap(value: int, bits: int) -> int:
    """Reduce an integer to a signed two's-complement value of the given width."""
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _encode_varint(value: int, bits: int) -> bytes:
    remaining = value & ((1 << bits) - 1)
    out = bytearray()
    while remaining & ~0x7F:
        out.append((remaining & 0x7F) | 0x80)
        remaining >>= 7
    out.append(remaining)
    return bytes(out)


def _decode_varint(source: Iterable[int], bits: int, too_long: str) -> tuple[int, int]:
    iterator = iter(source)
    value = 0
    position = 0
    consumed = 0
    while True:
        byte = next(iterator, None)
        if byte is None:
            raise EndOfBufferError()
        consumed += 1
        value |= (byte & 0x7F) << position
        if not byte & 0x80:
            break
        position += 7
        if position >= bits:
            raise InvalidDataError(too_long)
    return _wrap(value, bits), consumed


class PacketWriter:
    """Accumulates the bytes of an outgoing packet."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def _pack(self, packer: struct.Struct, value) -> None:
        try:
            self._buf += packer.pack(value)
        except (struct.error, OverflowError, TypeError) as exc:
            raise EncodeError(f"cannot encode {value!r}: {exc}") from exc

    def write_u8(self, value: int) -> None:
        self._pack(_U8, value)

    def write_bytes(self, data: bytes) -> None:
        self._buf += bytes(data)

    def write_bool(self, value: bool) -> None:
        self.write_u8(1 if value else 0)

    def write_i16(self, value: int) -> None:
        self._pack(_I16, value)

    def write_u16(self, value: int) -> None:
        self._pack(_U16, value)

    def write_i32(self, value: int) -> None:
        self._pack(_I32, value)

    def write_i64(self, value: int) -> None:
        self._pack(_I64, value)

    def write_u64(self, value: int) -> None:
        self._pack(_U64, value)

    def write_f32(self, value: float) -> None:
        self._pack(_F32, value)

    def write_f64(self, value: float) -> None:
        self._pack(_F64, value)

    def write_string(self, value: str) -> None:
        """Write a UTF-8 string prefixed with its byte length as a VarInt."""
        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodeError(f"string is not valid UTF-8: {exc}") from exc
        Var32(len(data)).encode(self)
        self.write_bytes(data)

    def to_bytes(self) -> bytes:
        return bytes(self._buf)


class PacketReader:
    """Reads values from the bytes of an incoming packet."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def iter_bytes(self) -> Iterator[int]:
        """Yield bytes one at a time, consuming each only when it is taken."""
        while self._pos < len(self._data):
            yield self.read_u8()

    def read_u8(self) -> int:
        if self._pos >= len(self._data):
            raise EndOfBufferError()
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def read_bytes(self, count: int) -> bytes:
        if count < 0:
            raise InvalidDataError(f"negative byte count {count}")
        if count > self.remaining():
            raise EndOfBufferError()
        chunk = self._data[self._pos:self._pos + count]
        self._pos += count
        return chunk

    def _unpack(self, packer: struct.Struct):
        return packer.unpack(self.read_bytes(packer.size))[0]

    def read_bool(self) -> bool:
        return self.read_u8() != 0

    def read_i16(self) -> int:
        return self._unpack(_I16)

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_i64(self) -> int:
        return self._unpack(_I64)

    def read_u64(self) -> int:
        return self._unpack(_U64)

    def read_f32(self) -> float:
        return self._unpack(_F32)

    def read_f64(self) -> float:
        return self._unpack(_F64)

    def read_string(self) -> str:
        length = Var32.decode(self).as_i32()
        if length < 0:
            raise InvalidDataError(f"negative string length {length}")
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidDataError("string data is not valid UTF-8") from exc


@dataclass(frozen=True, order=True, repr=False)
class Var32:
    """A 32-bit signed integer written in variable-length form."""

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _wrap(int(self.value), 32))

    def __repr__(self) -> str:
        return f"Var32({self.value})"

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def as_i32(self) -> int:
        return self.value

    def to_bytes(self) -> bytes:
        return _encode_varint(self.value, 32)

    @classmethod
    def decode_iter(cls, iterator: Iterable[int]) -> tuple[Var32, int]:
        """Decode from an iterable of bytes; also return how many bytes were consumed."""
        value, consumed = _decode_varint(iterator, 32, "VarInt is too long")
        return cls(value), consumed

    def encode(self, writer: PacketWriter) -> None:
        writer.write_bytes(self.to_bytes())

    @classmethod
    def decode(cls, reader: PacketReader) -> Var32:
        return cls.decode_iter(reader.iter_bytes())[0]


@dataclass(frozen=True, order=True, repr=False)
class Var64:
    """A 64-bit signed integer written in variable-length form."""

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _wrap(int(self.value), 64))

    def __repr__(self) -> str:
        return f"Var64({self.value})"

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def as_i64(self) -> int:
        return self.value

    def to_bytes(self) -> bytes:
        return _encode_varint(self.value, 64)

    @classmethod
    def decode_iter(cls, iterator: Iterable[int]) -> tuple[Var64, int]:
        """Decode from an iterable of bytes; also return how many bytes were consumed."""
        value, consumed = _decode_varint(iterator, 64, "VarLong is too long")
        return cls(value), consumed

    def encode(self, writer: PacketWriter) -> None:
        writer.write_bytes(self.to_bytes())

    @classmethod
    def decode(cls, reader: PacketReader) -> Var64:
        return cls.decode_iter(reader.iter_bytes())[0]