"""Collections written as a length prefix followed by items, or as items up to the end of a packet."""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Optional

from blockwire.wire import EndOfBufferError, InvalidDataError, PacketReader, PacketWriter, Var32

EncodeItem = Callable[[Any, PacketWriter], None]
DecodeItem = Callable[[PacketReader], Any]


def _encode_with_method(item: Any, writer: PacketWriter) -> None:
    item.encode(writer)


def _read_length(prefix: type, reader: PacketReader) -> int:
    length = int(prefix.decode(reader))
    if length < 0:
        raise InvalidDataError(f"negative length prefix {length}")
    return length


class LengthPrefixVec(list):
    """A list written as its length, then each item.

    The length is written with ``prefix`` (a VarInt unless a subclass says otherwise).
    Items are written with ``encode_item(item, writer)``, or their own ``encode`` method.
    """

    prefix: ClassVar[type] = Var32

    def __repr__(self) -> str:
        return f"{type(self).__name__}{list.__repr__(self)}"

    def encode(self, writer: PacketWriter, encode_item: Optional[EncodeItem] = None) -> None:
        encode_item = encode_item or _encode_with_method
        self.prefix(len(self)).encode(writer)
        for item in self:
            encode_item(item, writer)

    @classmethod
    def decode(cls, reader: PacketReader, decode_item: DecodeItem) -> LengthPrefixVec:
        length = _read_length(cls.prefix, reader)
        return cls(decode_item(reader) for _ in range(length))


class ConsumeAllVec(list):
    """A list with no length: items run to the end of the packet."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}{list.__repr__(self)}"

    def encode(self, writer: PacketWriter, encode_item: Optional[EncodeItem] = None) -> None:
        encode_item = encode_item or _encode_with_method
        for item in self:
            encode_item(item, writer)

    @classmethod
    def decode(cls, reader: PacketReader, decode_item: DecodeItem) -> ConsumeAllVec:
        """Read items until the buffer runs out; any other decoding error propagates."""
        items = cls()
        while True:
            try:
                item = decode_item(reader)
            except EndOfBufferError:
                break
            items.append(item)
        return items


class LengthPrefixHashMap(dict):
    """A mapping written as its size, then each key followed by its value."""

    prefix: ClassVar[type] = Var32

    def __repr__(self) -> str:
        return f"{type(self).__name__}{dict.__repr__(self)}"

    def encode(
        self,
        writer: PacketWriter,
        encode_key: Optional[EncodeItem] = None,
        encode_value: Optional[EncodeItem] = None,
    ) -> None:
        encode_key = encode_key or _encode_with_method
        encode_value = encode_value or _encode_with_method
        self.prefix(len(self)).encode(writer)
        for key, value in self.items():
            encode_key(key, writer)
            encode_value(value, writer)

    @classmethod
    def decode(
        cls, reader: PacketReader, decode_key: DecodeItem, decode_value: DecodeItem
    ) -> LengthPrefixHashMap:
        length = _read_length(cls.prefix, reader)
        result = cls()
        for _ in range(length):
            key = decode_key(reader)
            result[key] = decode_value(reader)
        return result