import pytest

from blockwire.nbt import Nbt, NbtCompound, NbtElement, NbtTag, to_nbt_element
from blockwire.wire import EndOfBufferError, InvalidDataError, PacketReader, PacketWriter


def _encode(element):
    writer = PacketWriter()
    element.encode(writer)
    return writer.to_bytes()


@pytest.mark.parametrize(
    "element",
    [
        NbtElement(NbtTag.BYTE, -5),
        NbtElement(NbtTag.SHORT, -300),
        NbtElement(NbtTag.INT, 123456),
        NbtElement(NbtTag.LONG, -(2**40)),
        NbtElement(NbtTag.FLOAT, 1.5),
        NbtElement(NbtTag.DOUBLE, 0.1),
        NbtElement(NbtTag.BARRAY, [-1, 0, 127]),
        NbtElement(NbtTag.STRING, "héllo"),
        NbtElement(NbtTag.LIST, [NbtElement(NbtTag.INT, 1), NbtElement(NbtTag.INT, 2)]),
        NbtElement(NbtTag.LIST, []),
        NbtElement(NbtTag.COMPOUND, NbtCompound({"a": 1, "b": "two"})),
        NbtElement(NbtTag.IARRAY, [1, -2]),
        NbtElement(NbtTag.LARRAY, [2**40, -1]),
    ],
)
def test_element_round_trip(element):
    reader = PacketReader(_encode(element))
    assert NbtElement.decode(reader) == element
    assert reader.remaining() == 0


def test_empty_list_payload_uses_end_tag():
    data = _encode(NbtElement(NbtTag.LIST, []))
    assert data == bytes([NbtTag.LIST, NbtTag.END, 0, 0, 0, 0])


def test_empty_nbt_bytes():
    writer = PacketWriter()
    Nbt().encode(writer)
    assert writer.to_bytes() == bytes([NbtTag.COMPOUND, NbtTag.END])


def test_nested_nbt_round_trip():
    inner = NbtCompound({"x": 3})
    root = NbtCompound({"inner": inner, "list": ["a", "b"], "big": 2**40})
    writer = PacketWriter()
    Nbt(root=root).encode(writer)
    decoded = Nbt.decode(PacketReader(writer.to_bytes()))
    assert decoded.root == root
    assert decoded.name == ""


def test_nbt_root_must_be_compound():
    with pytest.raises(InvalidDataError):
        Nbt.decode(PacketReader(bytes([NbtTag.INT, 0, 0, 0, 1])))


def test_compound_ends_at_end_of_buffer():
    assert Nbt.decode(PacketReader(bytes([NbtTag.COMPOUND]))).root == NbtCompound()


def test_read_named():
    nbt = Nbt.read_named(PacketReader(b"\x0a\x00\x04root\x00"))
    assert nbt.name == "root"
    assert len(nbt.root) == 0


def test_unknown_tag():
    with pytest.raises(InvalidDataError, match="13"):
        NbtElement.decode(PacketReader(bytes([13])))


def test_truncated_element():
    with pytest.raises(EndOfBufferError):
        NbtElement.decode(PacketReader(bytes([NbtTag.INT, 0])))


def test_nul_uses_java_encoding():
    element = NbtElement(NbtTag.STRING, "a\x00b")
    data = _encode(element)
    assert b"\xc0\x80" in data
    assert b"\x00" not in data[3:]
    assert NbtElement.decode(PacketReader(data)) == element


def test_supplementary_character_round_trip():
    element = NbtElement(NbtTag.STRING, "\U0001F600")
    data = _encode(element)
    assert all(byte < 0xF0 for byte in data)
    assert NbtElement.decode(PacketReader(data)) == element


def test_four_byte_utf8_is_rejected():
    raw = bytes([NbtTag.STRING, 0, 4]) + "\U0001F600".encode("utf-8")
    with pytest.raises(InvalidDataError):
        NbtElement.decode(PacketReader(raw))


def test_end_is_not_a_value():
    with pytest.raises(ValueError):
        NbtElement(NbtTag.END, None)


def test_to_nbt_element_conversions():
    assert to_nbt_element("x") == NbtElement(NbtTag.STRING, "x")
    assert to_nbt_element(5) == NbtElement(NbtTag.INT, 5)
    assert to_nbt_element(2**40).tag is NbtTag.LONG
    assert to_nbt_element(1.5) == NbtElement(NbtTag.DOUBLE, 1.5)
    assert to_nbt_element([1, 2]) == NbtElement(
        NbtTag.LIST, [NbtElement(NbtTag.INT, 1), NbtElement(NbtTag.INT, 2)]
    )
    element = NbtElement(NbtTag.BYTE, 1)
    assert to_nbt_element(element) is element


@pytest.mark.parametrize("value", [True, object(), 2**70])
def test_to_nbt_element_rejects(value):
    with pytest.raises((TypeError, ValueError)):
        to_nbt_element(value)


def test_compound_operations():
    compound = NbtCompound()
    compound.insert("a", 1)
    other = NbtCompound({"b": "two", "a": 3})
    compound.extend(other)
    assert compound.get("a") == NbtElement(NbtTag.INT, 3)
    assert compound.get("missing") is None
    assert dict(compound.entries()) == {
        "a": NbtElement(NbtTag.INT, 3),
        "b": NbtElement(NbtTag.STRING, "two"),
    }
    assert "b" in compound