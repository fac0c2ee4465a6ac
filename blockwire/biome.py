"""Biomes and their registry data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

from blockwire.colour import Colour
from blockwire.ident import Identifier
from blockwire.nbt import Nbt, NbtCompound, NbtElement, NbtTag
from blockwire.particle import Particle
from blockwire.registry import RegValue


def _int(value: int) -> NbtElement:
    value = int(value) & 0xFFFFFFFF
    return NbtElement(NbtTag.INT, value - (1 << 32) if value & 0x80000000 else value)


def _float(value: float) -> NbtElement:
    return NbtElement(NbtTag.FLOAT, float(value))


def _double(value: float) -> NbtElement:
    return NbtElement(NbtTag.DOUBLE, float(value))


def _string(value: str) -> NbtElement:
    return NbtElement(NbtTag.STRING, value)


def _byte(flag: bool) -> NbtElement:
    return NbtElement(NbtTag.BYTE, 1 if flag else 0)


class BiomeTempModifier(str, Enum):
    NONE = "none"
    FROZEN = "frozen"


class BiomeColourModifier(str, Enum):
    NONE = "none"
    DARK_FOREST = "dark_forest"
    SWAMP = "swamp"


@dataclass
class BiomeParticle:
    options: Particle
    probability: float


@dataclass
class BiomeRangedAmbientSound:
    """An ambient sound with an optional audible range."""

    sound: Identifier
    range: Optional[float] = None


BiomeAmbientSound = Union[Identifier, BiomeRangedAmbientSound]


@dataclass
class BiomeMoodSound:
    sound: Identifier
    tick_delay: int
    block_search_extent: int
    offset: float


@dataclass
class BiomeAdditionsSound:
    sound: Identifier
    tick_chance: float


@dataclass
class BiomeMusic:
    sound: Identifier
    min_delay: int
    max_delay: int
    replace_current_music: bool


@dataclass
class BiomeMusicWeights:
    data: BiomeMusic
    weight: int


@dataclass
class BiomeEffects:
    fog_color: Colour
    water_color: Colour
    water_fog_color: Colour
    sky_color: Colour
    foliage_color: Optional[Colour] = None
    grass_color: Optional[Colour] = None
    grass_color_modifier: Optional[BiomeColourModifier] = None
    particle: Optional[BiomeParticle] = None
    ambient_sound: Optional[BiomeAmbientSound] = None
    mood_sound: Optional[BiomeMoodSound] = None
    additions_sound: Optional[BiomeAdditionsSound] = None
    music: Optional[list[BiomeMusicWeights]] = field(default=None)

    def _to_nbt(self) -> NbtCompound:
        nbt = NbtCompound()
        nbt.insert("fog_color", _int(self.fog_color.to_int()))
        nbt.insert("water_color", _int(self.water_color.to_int()))
        nbt.insert("water_fog_color", _int(self.water_fog_color.to_int()))
        nbt.insert("sky_color", _int(self.sky_color.to_int()))
        if self.foliage_color is not None:
            nbt.insert("foliage_color", _int(self.foliage_color.to_int()))
        if self.grass_color is not None:
            nbt.insert("grass_color", _int(self.grass_color.to_int()))
        if self.grass_color_modifier is not None:
            nbt.insert("grass_color_modifier", _string(BiomeColourModifier(self.grass_color_modifier).value))
        if self.particle is not None:
            particle = NbtCompound()
            particle.insert("options", self.particle.options.to_nbt())
            particle.insert("probability", _float(self.particle.probability))
            nbt.insert("particle", particle)
        if self.ambient_sound is not None:
            nbt.insert("ambient_sound", _ambient_to_nbt(self.ambient_sound))
        if self.mood_sound is not None:
            mood = NbtCompound()
            mood.insert("sound", _string(str(self.mood_sound.sound)))
            mood.insert("tick_delay", _int(self.mood_sound.tick_delay))
            mood.insert("block_search_extent", _int(self.mood_sound.block_search_extent))
            mood.insert("offset", _double(self.mood_sound.offset))
            nbt.insert("mood_sound", mood)
        if self.additions_sound is not None:
            additions = NbtCompound()
            additions.insert("sound", _string(str(self.additions_sound.sound)))
            additions.insert("tick_chance", _double(self.additions_sound.tick_chance))
            nbt.insert("additions_sound", additions)
        if self.music is not None:
            nbt.insert("music", NbtElement(NbtTag.LIST, [_music_to_nbt(song) for song in self.music]))
        return nbt


def _ambient_to_nbt(sound: BiomeAmbientSound) -> NbtElement:
    if isinstance(sound, Identifier):
        return _string(str(sound))
    compound = NbtCompound()
    compound.insert("sound", _string(str(sound.sound)))
    if sound.range is not None:
        compound.insert("range", _float(sound.range))
    return NbtElement(NbtTag.COMPOUND, compound)


def _music_to_nbt(song: BiomeMusicWeights) -> NbtElement:
    data = NbtCompound()
    data.insert("sound", _string(str(song.data.sound)))
    data.insert("min_delay", _int(song.data.min_delay))
    data.insert("max_delay", _int(song.data.max_delay))
    data.insert("replace_current_music", _byte(song.data.replace_current_music))
    entry = NbtCompound()
    entry.insert("data", data)
    entry.insert("weight", _int(song.weight))
    return NbtElement(NbtTag.COMPOUND, entry)


@dataclass
class Biome(RegValue):
    has_precipitation: bool
    temperature: float
    downfall: float
    effects: BiomeEffects
    temperature_modifier: Optional[BiomeTempModifier] = None

    REGISTRY_ID: ClassVar[Identifier] = Identifier.vanilla("worldgen/biome")

    def to_registry_data_packet(self) -> Nbt:
        root = NbtCompound()
        root.insert("has_precipitation", _byte(self.has_precipitation))
        root.insert("temperature", _float(self.temperature))
        if self.temperature_modifier is not None:
            root.insert("temperature_modifier", _string(BiomeTempModifier(self.temperature_modifier).value))
        root.insert("downfall", _float(self.downfall))
        root.insert("effects", self.effects._to_nbt())
        return Nbt("", root)