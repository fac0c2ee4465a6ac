"""Named binary tag (NBT) values and their network encoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterator, Mapping

from blockwire.wire import EncodeError, InvalidDataError, PacketReader, PacketWriter

_I32_MIN, _I32_MAX = -(1 << 31), (1 << 31) - 1
_I64_MIN, _I64_MAX = -(1 << 63), (1 << 63) - 1


class NbtTag(IntEnum):
    """The type byte that precedes every NBT payload."""

    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    IARRAY = 11
    LARRAY = 12


def _signed8(byte: int) -> int:
    return byte - 0x100 if byte & 0x80 else byte


def _to_java_cesu8(text: str) -> bytes:
    out = bytearray()
    for ch in text:
        code = ord(ch)
        if code == 0:
            out += b"\xc0\x80"
        elif code > 0xFFFF:
            code -= 0x10000
            for unit in (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)):
                out += chr(unit).encode("utf-8", "surrogatepass")
        else:
            out += ch.encode("utf-8", "surrogatepass")
    return bytes(out)


def _from_java_cesu8(data: bytes) -> str:
    error = "String data is not valid CESU8"
    if any(byte >= 0xF0 for byte in data):
        raise InvalidDataError(error)
    try:
        raw = data.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
        return raw.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeError as exc:
        raise InvalidDataError(error) from exc


def _write_string(writer: PacketWriter, text: str) -> None:
    data = _to_java_cesu8(text)
    if len(data) > 0xFFFF:
        raise EncodeError(f"NBT string of {len(data)} bytes is too long")
    writer.write_u16(len(data))
    writer.write_bytes(data)


def _read_string(reader: PacketReader) -> str:
    return _from_java_cesu8(reader.read_bytes(reader.read_u16()))


def _read_length(reader: PacketReader) -> int:
    length = reader.read_i32()
    if length < 0:
        raise InvalidDataError(f"negative NBT length {length}")
    return length


def to_nbt_element(value: Any) -> NbtElement:
    """Convert a Python value to an NBT element.

    Elements pass through; ``str`` becomes a string, ``int`` an int (or a long
    when it does not fit 32 bits), ``float`` a double, lists and tuples a list
    and mappings a compound.
    """
    if isinstance(value, NbtElement):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans have no NBT form; use a byte")
    if isinstance(value, str):
        return NbtElement(NbtTag.STRING, value)
    if isinstance(value, int):
        if _I32_MIN <= value <= _I32_MAX:
            return NbtElement(NbtTag.INT, value)
        if _I64_MIN <= value <= _I64_MAX:
            return NbtElement(NbtTag.LONG, value)
        raise ValueError(f"integer {value} does not fit in 64 bits")
    if isinstance(value, float):
        return NbtElement(NbtTag.DOUBLE, value)
    if isinstance(value, (list, tuple)):
        return NbtElement(NbtTag.LIST, [to_nbt_element(item) for item in value])
    if isinstance(value, NbtCompound):
        return NbtElement(NbtTag.COMPOUND, value)
    if isinstance(value, Mapping):
        return NbtElement(NbtTag.COMPOUND, NbtCompound(value))
    raise TypeError(f"cannot convert {type(value).__name__} to NBT")


@dataclass
class NbtElement:
    """One tagged NBT value. Elements of a list must all share one tag."""

    tag: NbtTag
    value: Any

    def __post_init__(self) -> None:
        self.tag = NbtTag(self.tag)
        if self.tag is NbtTag.END:
            raise ValueError("END is not a value tag")

    def encode(self, writer: PacketWriter) -> None:
        writer.write_u8(self.tag)
        self._encode_payload(writer)

    def _encode_payload(self, writer: PacketWriter) -> None:
        tag, value = self.tag, self.value
        if tag is NbtTag.BYTE:
            writer.write_u8(value & 0xFF)
        elif tag is NbtTag.SHORT:
            writer.write_i16(value)
        elif tag is NbtTag.INT:
            writer.write_i32(value)
        elif tag is NbtTag.LONG:
            writer.write_i64(value)
        elif tag is NbtTag.FLOAT:
            writer.write_f32(value)
        elif tag is NbtTag.DOUBLE:
            writer.write_f64(value)
        elif tag is NbtTag.BARRAY:
            writer.write_i32(len(value))
            writer.write_bytes(bytes(byte & 0xFF for byte in value))
        elif tag is NbtTag.STRING:
            _write_string(writer, value)
        elif tag is NbtTag.LIST:
            writer.write_u8(value[0].tag if value else NbtTag.END)
            writer.write_i32(len(value))
            for element in value:
                element._encode_payload(writer)
        elif tag is NbtTag.COMPOUND:
            value._encode_payload(writer)
        elif tag is NbtTag.IARRAY:
            writer.write_i32(len(value))
            for item in value:
                writer.write_i32(item)
        elif tag is NbtTag.LARRAY:
            writer.write_i32(len(value))
            for item in value:
                writer.write_i64(item)

    @classmethod
    def decode(cls, reader: PacketReader) -> NbtElement:
        return cls._decode_payload(reader, reader.read_u8())

    @classmethod
    def _decode_payload(cls, reader: PacketReader, tag: int) -> NbtElement:
        if tag == NbtTag.BYTE:
            return cls(NbtTag.BYTE, _signed8(reader.read_u8()))
        if tag == NbtTag.SHORT:
            return cls(NbtTag.SHORT, reader.read_i16())
        if tag == NbtTag.INT:
            return cls(NbtTag.INT, reader.read_i32())
        if tag == NbtTag.LONG:
            return cls(NbtTag.LONG, reader.read_i64())
        if tag == NbtTag.FLOAT:
            return cls(NbtTag.FLOAT, reader.read_f32())
        if tag == NbtTag.DOUBLE:
            return cls(NbtTag.DOUBLE, reader.read_f64())
        if tag == NbtTag.BARRAY:
            data = reader.read_bytes(_read_length(reader))
            return cls(NbtTag.BARRAY, [_signed8(byte) for byte in data])
        if tag == NbtTag.STRING:
            return cls(NbtTag.STRING, _read_string(reader))
        if tag == NbtTag.LIST:
            element_tag = reader.read_u8()
            length = _read_length(reader)
            return cls(NbtTag.LIST, [cls._decode_payload(reader, element_tag) for _ in range(length)])
        if tag == NbtTag.COMPOUND:
            return cls(NbtTag.COMPOUND, NbtCompound._decode_payload(reader))
        if tag == NbtTag.IARRAY:
            length = _read_length(reader)
            return cls(NbtTag.IARRAY, [reader.read_i32() for _ in range(length)])
        if tag == NbtTag.LARRAY:
            length = _read_length(reader)
            return cls(NbtTag.LARRAY, [reader.read_i64() for _ in range(length)])
        raise InvalidDataError(f"Unknown nbt tag `{tag}`")


class NbtCompound:
    """A mapping of names to NBT elements."""

    def __init__(self, items: Mapping[str, Any] | None = None) -> None:
        self._items: dict[str, NbtElement] = {}
        for key, value in (items or {}).items():
            self.insert(key, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NbtCompound):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"NbtCompound({self._items!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def get(self, key: str) -> NbtElement | None:
        return self._items.get(key)

    def insert(self, key: str, value: Any) -> None:
        self._items[str(key)] = to_nbt_element(value)

    def extend(self, other: NbtCompound) -> None:
        self._items.update(other._items)

    def entries(self) -> Iterator[tuple[str, NbtElement]]:
        return iter(list(self._items.items()))

    def _encode_payload(self, writer: PacketWriter) -> None:
        for key, value in self._items.items():
            writer.write_u8(value.tag)
            _write_string(writer, key)
            value._encode_payload(writer)
        writer.write_u8(NbtTag.END)

    @classmethod
    def _decode_payload(cls, reader: PacketReader) -> NbtCompound:
        compound = cls()
        while reader.remaining() > 0:
            tag = reader.read_u8()
            if tag == NbtTag.END:
                break
            key = _read_string(reader)
            compound._items[key] = NbtElement._decode_payload(reader, tag)
        return compound


@dataclass
class Nbt:
    """A root compound, optionally named. The network form omits the name."""

    name: str = ""
    root: NbtCompound = field(default_factory=NbtCompound)

    def __repr__(self) -> str:
        return f"Nbt({self.name!r} -> Compound({self.root!r}))"

    def encode(self, writer: PacketWriter) -> None:
        writer.write_u8(NbtTag.COMPOUND)
        self.root._encode_payload(writer)

    @classmethod
    def decode(cls, reader: PacketReader) -> Nbt:
        if reader.read_u8() != NbtTag.COMPOUND:
            raise InvalidDataError("Nbt root is not a compound")
        return cls("", NbtCompound._decode_payload(reader))

    @classmethod
    def read_named(cls, reader: PacketReader) -> Nbt:
        """Read a root compound that carries its name after the tag."""
        if reader.read_u8() != NbtTag.COMPOUND:
            raise InvalidDataError("Nbt root is not a compound")
        name = _read_string(reader)
        return cls(name, NbtCompound._decode_payload(reader))