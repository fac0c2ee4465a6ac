"""Simple values that live in registries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Mapping

from blockwire.ident import Identifier
from blockwire.nbt import Nbt, NbtCompound, NbtElement, NbtTag
from blockwire.registry import RegEntry, RegValue, Registry, RegistryFrozen
from blockwire.wire import PacketReader, PacketWriter


def _string(value: object) -> NbtElement:
    return NbtElement(NbtTag.STRING, str(value))


@dataclass
class BannerPattern(RegValue):
    asset_id: Identifier
    translation_key: str

    REGISTRY_ID: ClassVar[Identifier] = Identifier.vanilla("banner_pattern")

    def to_registry_data_packet(self) -> Nbt:
        root = NbtCompound()
        root.insert("asset_id", _string(self.asset_id))
        root.insert("translation_key", _string(self.translation_key))
        return Nbt("", root)


@dataclass
class WolfVariant(RegValue):
    wild_texture: Identifier
    tame_texture: Identifier
    angry_texture: Identifier
    biomes: list[Identifier] = field(default_factory=list)

    REGISTRY_ID: ClassVar[Identifier] = Identifier.vanilla("wolf_variant")

    def to_registry_data_packet(self) -> Nbt:
        root = NbtCompound()
        root.insert("wild_texture", _string(self.wild_texture))
        root.insert("tame_texture", _string(self.tame_texture))
        root.insert("angry_texture", _string(self.angry_texture))
        root.insert("biomes", NbtElement(NbtTag.LIST, [_string(biome) for biome in self.biomes]))
        return Nbt("", root)


@dataclass(frozen=True)
class Block:
    id: Identifier

    REGISTRY_ID: ClassVar[Identifier] = Identifier("minecraft", "block")

    def encode(self, writer: PacketWriter) -> None:
        self.id.encode(writer)

    @classmethod
    def decode(cls, reader: PacketReader) -> Block:
        return cls(Identifier.decode(reader))


@dataclass(frozen=True)
class EntityType:
    id: Identifier

    REGISTRY_ID: ClassVar[Identifier] = Identifier("minecraft", "entity_type")

    def encode(self, writer: PacketWriter) -> None:
        self.id.encode(writer)

    @classmethod
    def decode(cls, reader: PacketReader) -> EntityType:
        return cls(Identifier.decode(reader))


@dataclass(frozen=True)
class SoundEvent:
    name: Identifier
    fixed_range: float | None = None

    REGISTRY_ID: ClassVar[Identifier] = Identifier("minecraft", "sound_event")


@dataclass(frozen=True)
class AttributeType:
    id: Identifier


@dataclass(frozen=True)
class ParticleType:
    id: Identifier


@dataclass(frozen=True)
class Recipe:
    id: Identifier


@dataclass(frozen=True)
class Screen:
    id: Identifier


@dataclass(frozen=True)
class StatusEffect:
    id: Identifier


@dataclass(frozen=True)
class BlockState:
    """A block with its property values, kept sorted by property name."""

    id: Identifier
    properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", dict(sorted(dict(self.properties).items())))

    def __hash__(self) -> int:
        return hash((self.id, tuple(self.properties.items())))


@dataclass(frozen=True)
class BlockStateWithMetadata:
    block_state: BlockState
    protocol_id: int


@dataclass(frozen=True)
class Item:
    id: Identifier


class InvalidItemError(ValueError):
    """The name does not match any item in the registry."""

    def __init__(self, message: str = "invalid item") -> None:
        super().__init__(message)


def item_entry_from_str(registry: Registry[Item] | RegistryFrozen[Item], value: str) -> RegEntry[Item]:
    """Find the entry of the item named ``value`` (namespace optional)."""
    entry = registry.get_entry(Identifier.parse(value))
    if entry is None:
        raise InvalidItemError()
    return entry