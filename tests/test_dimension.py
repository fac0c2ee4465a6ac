import pytest

from blockwire.ident import Identifier
from blockwire.nbt import Nbt, NbtElement, NbtTag
from blockwire.wire import PacketReader, PacketWriter
from blockwire.dimension import (
    BiasedToBottomLight,
    ClampedLight,
    ClampedNormalLight,
    ConstantLight,
    DimEffects,
    DimType,
    UniformLight,
    WeightedListLight,
)


def _dim(**overrides):
    values = dict(
        has_skylight=True,
        has_ceiling=False,
        ultrawarm=False,
        natural=True,
        coordinate_scale=1.0,
        bed_works=True,
        respawn_anchor_works=False,
        min_y=-64,
        height=384,
        logical_height=384,
        infiniburn="#minecraft:infiniburn_overworld",
        effects=DimEffects.NETHER,
        ambient_light=0.5,
        piglin_safe=False,
        has_raids=True,
        monster_spawn_light_level=UniformLight(0, 7),
        monster_spawn_block_light_limit=0,
    )
    values.update(overrides)
    return DimType(**values)


def test_registry_id():
    assert DimType.REGISTRY_ID == Identifier("minecraft", "dimension_type")


def test_booleans_are_bytes():
    root = _dim().to_registry_data_packet().root
    assert root.get("has_skylight") == NbtElement(NbtTag.BYTE, 1)
    assert root.get("has_ceiling") == NbtElement(NbtTag.BYTE, 0)
    assert root.get("has_raids") == NbtElement(NbtTag.BYTE, 1)


def test_scalar_fields():
    root = _dim().to_registry_data_packet().root
    assert root.get("min_y") == NbtElement(NbtTag.INT, -64)
    assert root.get("effects") == NbtElement(NbtTag.STRING, "minecraft:the_nether")
    assert root.get("coordinate_scale") == NbtElement(NbtTag.DOUBLE, 1.0)
    assert root.get("ambient_light") == NbtElement(NbtTag.FLOAT, 0.5)
    assert root.get("infiniburn") == NbtElement(NbtTag.STRING, "#minecraft:infiniburn_overworld")


def test_fixed_time_optional():
    assert "fixed_time" not in _dim().to_registry_data_packet().root
    root = _dim(fixed_time=6000).to_registry_data_packet().root
    assert root.get("fixed_time") == NbtElement(NbtTag.LONG, 6000)


def test_uniform_light_level():
    nbt = UniformLight(0, 7).to_nbt()
    assert nbt.get("type") == NbtElement(NbtTag.STRING, "uniform")
    assert nbt.get("max_inclusive") == NbtElement(NbtTag.INT, 7)


@pytest.mark.parametrize(
    "level, kind",
    [
        (ConstantLight(3), "constant"),
        (BiasedToBottomLight(1, 2), "biased_to_bottom"),
        (ClampedNormalLight(0.5, 1.0, 0, 15), "clamped_normal"),
        (ClampedLight(0, 7, ConstantLight(4)), "clamped"),
        (WeightedListLight([(ConstantLight(1), 2)]), "weighted_list"),
    ],
)
def test_light_level_types(level, kind):
    assert level.to_nbt().get("type") == NbtElement(NbtTag.STRING, kind)


def test_clamped_nests_source():
    nbt = ClampedLight(0, 7, ConstantLight(4)).to_nbt()
    source = nbt.get("source")
    assert source.tag is NbtTag.COMPOUND
    assert source.value == ConstantLight(4).to_nbt()


def test_weighted_list_entries():
    nbt = WeightedListLight([(ConstantLight(1), 2), (UniformLight(0, 3), 5)]).to_nbt()
    entries = nbt.get("distribution").value
    assert len(entries) == 2
    assert entries[1].value.get("weight") == NbtElement(NbtTag.INT, 5)
    assert entries[1].value.get("data").value == UniformLight(0, 3).to_nbt()


def test_registry_data_wire_round_trip():
    packet = _dim(fixed_time=1000, monster_spawn_light_level=ClampedNormalLight(0.5, 2.0, 0, 15)).to_registry_data_packet()
    writer = PacketWriter()
    packet.encode(writer)
    decoded = Nbt.decode(PacketReader(writer.to_bytes()))
    assert decoded.root == packet.root