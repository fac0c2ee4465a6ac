from blockwire.ident import Identifier
from blockwire.nbt import NbtElement, NbtTag
from blockwire.particle import Particle
from blockwire.wire import PacketReader, PacketWriter


def test_to_nbt_has_only_type():
    nbt = Particle(Identifier("minecraft", "flame")).to_nbt()
    assert nbt.get("type") == NbtElement(NbtTag.STRING, "minecraft:flame")
    assert len(nbt) == 1


def test_encode_is_identifier_string():
    particle = Particle(Identifier("test", "spark"))
    writer = PacketWriter()
    particle.encode(writer)
    expected = PacketWriter()
    expected.write_string("test:spark")
    assert writer.to_bytes() == expected.to_bytes()


def test_encode_decodes_as_identifier():
    particle = Particle(Identifier.vanilla("dust"))
    writer = PacketWriter()
    particle.encode(writer)
    reader = PacketReader(writer.to_bytes())
    assert Identifier.decode(reader) == particle.id
    assert reader.remaining() == 0