"""Values written as one of two alternatives, chosen by a leading flag or number."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from blockwire.ident import Identifier
from blockwire.registry import RegEntry
from blockwire.wire import InvalidDataError, PacketReader, PacketWriter, Var32

EncodeValue = Callable[[Any, PacketWriter], None]
DecodeValue = Callable[[PacketReader], Any]


def _encode_with_method(value: Any, writer: PacketWriter) -> None:
    value.encode(writer)


@dataclass(frozen=True)
class Either:
    """One of two values, preceded by a byte: 1 for the first kind, 0 for the second."""

    is_true: bool
    value: Any

    def encode(
        self,
        writer: PacketWriter,
        encode_true: Optional[EncodeValue] = None,
        encode_false: Optional[EncodeValue] = None,
    ) -> None:
        if self.is_true:
            writer.write_u8(1)
            (encode_true or _encode_with_method)(self.value, writer)
        else:
            writer.write_u8(0)
            (encode_false or _encode_with_method)(self.value, writer)

    @classmethod
    def decode(cls, reader: PacketReader, decode_true: DecodeValue, decode_false: DecodeValue) -> Either:
        if reader.read_u8() != 0:
            return cls(True, decode_true(reader))
        return cls(False, decode_false(reader))


@dataclass(frozen=True)
class OptionVarInt:
    """An optional VarInt written as the value plus one, or zero when absent."""

    value: Optional[Var32] = None

    def __post_init__(self) -> None:
        if self.value is not None and not isinstance(self.value, Var32):
            object.__setattr__(self, "value", Var32(self.value))

    def into_option(self) -> Optional[Var32]:
        return self.value

    def encode(self, writer: PacketWriter) -> None:
        raw = 0 if self.value is None else self.value.as_i32() + 1
        Var32(raw).encode(writer)

    @classmethod
    def decode(cls, reader: PacketReader) -> OptionVarInt:
        raw = Var32.decode(reader).as_i32()
        if raw == 0:
            return cls(None)
        return cls(Var32(raw - 1))


@dataclass(frozen=True)
class RegOr:
    """Either a registry entry or an inline value.

    An entry is written as its id plus one; an inline value as zero followed by the value.
    """

    entry: Optional[RegEntry] = None
    value: Any = None

    def __post_init__(self) -> None:
        if self.entry is not None and self.value is not None:
            raise ValueError("RegOr holds either an entry or a value, not both")

    @property
    def is_entry(self) -> bool:
        return self.entry is not None

    def encode(self, writer: PacketWriter, encode_value: Optional[EncodeValue] = None) -> None:
        if self.entry is not None:
            Var32(self.entry.id + 1).encode(writer)
        else:
            Var32(0).encode(writer)
            (encode_value or _encode_with_method)(self.value, writer)

    @classmethod
    def decode(cls, reader: PacketReader, decode_value: DecodeValue) -> RegOr:
        id_plus_one = Var32.decode(reader).as_i32() & 0xFFFFFFFF
        if id_plus_one == 0:
            return cls(value=decode_value(reader))
        return cls(entry=RegEntry(id_plus_one - 1))


@dataclass(frozen=True, eq=False)
class IdSet:
    """A set of registry entries, given either by tag name or as explicit ids.

    Ids compare equal regardless of order.
    """

    tag: Optional[Identifier] = None
    ids: Optional[tuple] = None

    def __post_init__(self) -> None:
        if (self.tag is None) == (self.ids is None):
            raise ValueError("IdSet holds exactly one of a tag or a list of ids")
        if self.ids is not None:
            object.__setattr__(self, "ids", tuple(self.ids))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdSet):
            return NotImplemented
        if self.tag is not None or other.tag is not None:
            return self.tag == other.tag
        if len(self.ids) != len(other.ids):
            return False
        return all(entry in other.ids for entry in self.ids)

    def __hash__(self) -> int:
        if self.tag is not None:
            return hash(("tag", self.tag))
        return hash(("ids", frozenset(self.ids)))

    def encode(self, writer: PacketWriter) -> None:
        if self.tag is not None:
            Var32(0).encode(writer)
            self.tag.encode(writer)
        else:
            Var32(len(self.ids)).encode(writer)
            for entry in self.ids:
                entry.encode(writer)

    @classmethod
    def decode(cls, reader: PacketReader) -> IdSet:
        amount = Var32.decode(reader).as_i32()
        if amount == 0:
            return cls(tag=Identifier.decode(reader))
        if amount < 0:
            raise InvalidDataError(f"negative id count {amount}")
        return cls(ids=tuple(RegEntry.decode(reader) for _ in range(amount)))