"""Positions, vectors and angles as they appear on the wire."""

from __future__ import annotations

import math
from dataclasses import dataclass

from blockwire.wire import PacketReader, PacketWriter

_U64_MASK = (1 << 64) - 1


@dataclass(frozen=True, repr=False)
class Angle:
    """An angle stored as a fraction of a full turn."""

    frac: float = 0.0

    @classmethod
    def of_frac(cls, frac: float) -> Angle:
        return cls(frac % 1.0)

    def as_frac(self) -> float:
        return self.frac

    @classmethod
    def of_rad(cls, rad: float) -> Angle:
        return cls(rad / math.tau)

    def as_rad(self) -> float:
        return self.frac * math.tau

    @classmethod
    def of_deg(cls, deg: float) -> Angle:
        return cls(deg / 360.0)

    def as_deg(self) -> float:
        return self.frac * 360.0

    def __repr__(self) -> str:
        return f"Angle({self.frac}/1.0)"

    def encode(self, writer: PacketWriter) -> None:
        """Write one byte of 1/256 turns, saturating outside the byte range."""
        scaled = self.frac * 256.0
        if math.isnan(scaled):
            byte = 0
        else:
            byte = int(max(0.0, min(255.0, scaled)))
        writer.write_u8(byte)

    @classmethod
    def decode(cls, reader: PacketReader) -> Angle:
        return cls(reader.read_u8() / 256.0)


@dataclass(frozen=True, repr=False)
class BlockPos:
    """A block position packed into one 64-bit integer."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __repr__(self) -> str:
        return f"BlockPos({self.x}, {self.y}, {self.z})"

    def encode(self, writer: PacketWriter) -> None:
        packed = ((self.x & 0x3FFFFFF) << 38) | ((self.z & 0x3FFFFF) << 12) | (self.y & 0xFFF)
        writer.write_u64(packed)

    @classmethod
    def decode(cls, reader: PacketReader) -> BlockPos:
        packed = reader.read_u64()
        y = packed & 0xFFF
        if y & 0x800:
            y -= 0x1000
        return cls(
            x=packed >> 38,
            y=y,
            z=((packed << 26) & _U64_MASK) >> 38,
        )


@dataclass(frozen=True, repr=False)
class ChunkSectionPosition:
    """A chunk section position packed into one 64-bit integer."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __repr__(self) -> str:
        return f"ChunkSection({self.x}, {self.y}, {self.z})"

    def encode(self, writer: PacketWriter) -> None:
        packed = ((self.x & 0x3FFFFF) << 42) | ((self.z & 0x3FFFF) << 20) | (self.y & 0xFFFFF)
        writer.write_u64(packed)

    @classmethod
    def decode(cls, reader: PacketReader) -> ChunkSectionPosition:
        packed = reader.read_u64()
        return cls(
            x=packed >> 42,
            y=((packed << 44) & _U64_MASK) >> 44,
            z=((packed << 22) & _U64_MASK) >> 42,
        )


@dataclass(frozen=True, repr=False)
class Vec3d:
    """A point or vector of three doubles."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __repr__(self) -> str:
        return f"Vec3d({self.x}, {self.y}, {self.z})"

    def encode(self, writer: PacketWriter) -> None:
        writer.write_f64(self.x)
        writer.write_f64(self.y)
        writer.write_f64(self.z)

    @classmethod
    def decode(cls, reader: PacketReader) -> Vec3d:
        return cls(reader.read_f64(), reader.read_f64(), reader.read_f64())