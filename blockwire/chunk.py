"""Chunk sections and their paletted, bit-packed data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from blockwire.registry import RegEntry
from blockwire.wire import PacketWriter, Var32

_U64_MASK = (1 << 64) - 1

BLOCK_STATE_ENTRIES = 4096
BIOME_ENTRIES = 64
DIRECT_BITS_PER_ENTRY = 15


@dataclass
class DataArray:
    """Values packed into 64-bit longs; entries never straddle two longs."""

    bits_per_entry: int
    input_data: list[int] = field(default_factory=list)

    def to_bit_stream(self) -> list[int]:
        bits = self.bits_per_entry
        if not 0 <= bits <= 64:
            raise ValueError(f"bits per entry {bits} is outside 0..64")
        if bits == 0:
            return []
        per_long = 64 // bits
        mask = (1 << bits) - 1
        output = [0] * -(-len(self.input_data) // per_long)
        for index, value in enumerate(self.input_data):
            slot, position = divmod(index, per_long)
            offset = position * bits
            cleared = output[slot] & ~(mask << offset)
            output[slot] = (cleared | (value << offset)) & _U64_MASK
        return output

    def encode(self, writer: PacketWriter) -> None:
        longs = self.to_bit_stream()
        Var32(len(longs)).encode(writer)
        for long in longs:
            writer.write_u64(long)


@dataclass
class SingleValued:
    """A palette of one entry that fills the whole container."""

    entry: RegEntry

    def to_data_array(self, bits_per_entry: int) -> DataArray:
        if bits_per_entry != 0:
            raise ValueError("a single-valued palette needs 0 bits per entry")
        return DataArray(0, [])

    def encode(self, writer: PacketWriter) -> None:
        Var32(self.entry.id).encode(writer)


@dataclass
class Indirect:
    """A palette of registry entries with data indexing into it."""

    mappings: list[RegEntry]
    data: list[int]

    def to_data_array(self, bits_per_entry: int) -> DataArray:
        if bits_per_entry < 1:
            raise ValueError("an indirect palette needs at least 1 bit per entry")
        return DataArray(bits_per_entry, list(self.data))

    def encode(self, writer: PacketWriter) -> None:
        Var32(len(self.mappings)).encode(writer)
        for entry in self.mappings:
            Var32(entry.id).encode(writer)


@dataclass
class Direct:
    """No palette: data holds registry entries directly."""

    data: list[RegEntry]

    def to_data_array(self, bits_per_entry: int) -> DataArray:
        if bits_per_entry != DIRECT_BITS_PER_ENTRY:
            raise ValueError(f"a direct palette needs {DIRECT_BITS_PER_ENTRY} bits per entry")
        return DataArray(bits_per_entry, [entry.id for entry in self.data])

    def encode(self, writer: PacketWriter) -> None:
        """A direct palette has no palette bytes."""


PaletteFormat = Union[SingleValued, Indirect, Direct]


@dataclass
class PalettedContainer:
    bits_per_entry: int
    format: PaletteFormat

    def encode(self, writer: PacketWriter) -> None:
        writer.write_u8(self.bits_per_entry)
        self.format.encode(writer)
        self.format.to_data_array(self.bits_per_entry).encode(writer)


def _check_size(container: PalettedContainer, expected: int, what: str) -> None:
    palette = container.format
    if isinstance(palette, (Indirect, Direct)) and len(palette.data) != expected:
        raise ValueError(f"{what} need {expected} entries, got {len(palette.data)}")


@dataclass
class ChunkSection:
    """A 16x16x16 section: block states and 4x4x4 biomes."""

    block_count: int
    block_states: PalettedContainer
    biomes: PalettedContainer

    def __post_init__(self) -> None:
        _check_size(self.block_states, BLOCK_STATE_ENTRIES, "block states")
        _check_size(self.biomes, BIOME_ENTRIES, "biomes")

    def encode(self, writer: PacketWriter) -> None:
        writer.write_i16(self.block_count)
        self.block_states.encode(writer)
        self.biomes.encode(writer)


@dataclass
class ChunkSectionData:
    """All sections of a chunk, written as one length-prefixed byte blob."""

    sections: list[ChunkSection] = field(default_factory=list)

    def encode(self, writer: PacketWriter) -> None:
        inner = PacketWriter()
        for section in self.sections:
            section.encode(inner)
        data = inner.to_bytes()
        Var32(len(data)).encode(writer)
        writer.write_bytes(data)