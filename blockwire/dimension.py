"""Dimension types and their registry data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

from blockwire.ident import Identifier
from blockwire.nbt import Nbt, NbtCompound, NbtElement, NbtTag
from blockwire.registry import RegValue


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def _int(value: int) -> NbtElement:
    return NbtElement(NbtTag.INT, _wrap(int(value), 32))


def _float(value: float) -> NbtElement:
    return NbtElement(NbtTag.FLOAT, float(value))


def _string(value: str) -> NbtElement:
    return NbtElement(NbtTag.STRING, value)


def _byte(flag: bool) -> NbtElement:
    return NbtElement(NbtTag.BYTE, 1 if flag else 0)


class DimEffects(str, Enum):
    OVERWORLD = "minecraft:overworld"
    NETHER = "minecraft:the_nether"
    END = "minecraft:the_end"


def _typed(kind: str) -> NbtCompound:
    nbt = NbtCompound()
    nbt.insert("type", _string(kind))
    return nbt


@dataclass(frozen=True)
class ConstantLight:
    value: int

    def to_nbt(self) -> NbtCompound:
        nbt = _typed("constant")
        nbt.insert("value", _int(self.value))
        return nbt


@dataclass(frozen=True)
class UniformLight:
    min_inclusive: int
    max_inclusive: int

    def to_nbt(self) -> NbtCompound:
        nbt = _typed("uniform")
        nbt.insert("min_inclusive", _int(self.min_inclusive))
        nbt.insert("max_inclusive", _int(self.max_inclusive))
        return nbt


@dataclass(frozen=True)
class BiasedToBottomLight:
    min_inclusive: int
    max_inclusive: int

    def to_nbt(self) -> NbtCompound:
        nbt = _typed("biased_to_bottom")
        nbt.insert("min_inclusive", _int(self.min_inclusive))
        nbt.insert("max_inclusive", _int(self.max_inclusive))
        return nbt


@dataclass(frozen=True)
class ClampedLight:
    min_inclusive: int
    max_inclusive: int
    source: MonsterSpawnLightLevel

    def to_nbt(self) -> NbtCompound:
        nbt = _typed("clamped")
        nbt.insert("min_inclusive", _int(self.min_inclusive))
        nbt.insert("max_inclusive", _int(self.max_inclusive))
        nbt.insert("source", self.source.to_nbt())
        return nbt


@dataclass(frozen=True)
class ClampedNormalLight:
    mean: float
    deviation: float
    min_inclusive: int
    max_inclusive: int

    def to_nbt(self) -> NbtCompound:
        nbt = _typed("clamped_normal")
        nbt.insert("mean", _float(self.mean))
        nbt.insert("deviation", _float(self.deviation))
        nbt.insert("min_inclusive", _int(self.min_inclusive))
        nbt.insert("max_inclusive", _int(self.max_inclusive))
        return nbt


@dataclass(frozen=True)
class WeightedListLight:
    """Light levels drawn from weighted alternatives, given as ``(level, weight)`` pairs."""

    distribution: tuple[tuple[MonsterSpawnLightLevel, int], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "distribution", tuple(tuple(pair) for pair in self.distribution))

    def to_nbt(self) -> NbtCompound:
        nbt = _typed("weighted_list")
        entries = []
        for data, weight in self.distribution:
            entry = NbtCompound()
            entry.insert("data", data.to_nbt())
            entry.insert("weight", _int(weight))
            entries.append(NbtElement(NbtTag.COMPOUND, entry))
        nbt.insert("distribution", NbtElement(NbtTag.LIST, entries))
        return nbt


MonsterSpawnLightLevel = Union[
    ConstantLight, UniformLight, BiasedToBottomLight, ClampedLight, ClampedNormalLight, WeightedListLight
]


@dataclass
class DimType(RegValue):
    has_skylight: bool
    has_ceiling: bool
    ultrawarm: bool
    natural: bool
    coordinate_scale: float
    bed_works: bool
    respawn_anchor_works: bool
    min_y: int
    height: int
    logical_height: int
    infiniburn: str
    effects: DimEffects
    ambient_light: float
    piglin_safe: bool
    has_raids: bool
    monster_spawn_light_level: MonsterSpawnLightLevel
    monster_spawn_block_light_limit: int
    fixed_time: Optional[int] = field(default=None)

    REGISTRY_ID: ClassVar[Identifier] = Identifier.vanilla("dimension_type")

    def to_registry_data_packet(self) -> Nbt:
        nbt = NbtCompound()
        if self.fixed_time is not None:
            nbt.insert("fixed_time", NbtElement(NbtTag.LONG, _wrap(int(self.fixed_time), 64)))
        nbt.insert("has_skylight", _byte(self.has_skylight))
        nbt.insert("has_ceiling", _byte(self.has_ceiling))
        nbt.insert("ultrawarm", _byte(self.ultrawarm))
        nbt.insert("natural", _byte(self.natural))
        nbt.insert("coordinate_scale", NbtElement(NbtTag.DOUBLE, float(self.coordinate_scale)))
        nbt.insert("bed_works", _byte(self.bed_works))
        nbt.insert("respawn_anchor_works", _byte(self.respawn_anchor_works))
        nbt.insert("min_y", _int(self.min_y))
        nbt.insert("height", _int(self.height))
        nbt.insert("logical_height", _int(self.logical_height))
        nbt.insert("infiniburn", _string(self.infiniburn))
        nbt.insert("effects", _string(DimEffects(self.effects).value))
        nbt.insert("ambient_light", _float(self.ambient_light))
        nbt.insert("piglin_safe", _byte(self.piglin_safe))
        nbt.insert("has_raids", _byte(self.has_raids))
        nbt.insert("monster_spawn_light_level", self.monster_spawn_light_level.to_nbt())
        nbt.insert("monster_spawn_block_light_limit", _int(self.monster_spawn_block_light_limit))
        return Nbt("", nbt)