"""Particles referenced by identifier."""

from __future__ import annotations

from dataclasses import dataclass

from blockwire.ident import Identifier
from blockwire.nbt import NbtCompound, NbtElement, NbtTag
from blockwire.wire import PacketWriter


@dataclass(frozen=True)
class Particle:
    """A particle type; particle-specific options are not carried."""

    id: Identifier

    def to_nbt(self) -> NbtCompound:
        nbt = NbtCompound()
        nbt.insert("type", NbtElement(NbtTag.STRING, str(self.id)))
        return nbt

    def encode(self, writer: PacketWriter) -> None:
        self.id.encode(writer)