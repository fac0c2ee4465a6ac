import pytest

from blockwire.ident import Identifier
from blockwire.registry import RegEntry, Registry, RegValue
from blockwire.wire import PacketReader, PacketWriter, Var32


def _abc_registry():
    rg = Registry()
    rg.insert(Identifier("test", "a"), 10)
    rg.insert(Identifier("test", "b"), 20)
    rg.insert(Identifier("test", "c"), 30)
    return rg


def test_simple_registry():
    rg = _abc_registry()
    assert rg.get(Identifier("test", "b")) == 20


def test_registries_can_freeze():
    rg = _abc_registry().freeze()
    assert rg.get(Identifier("test", "b")) == 20


def test_tags():
    rg = Registry()
    rg.insert(Identifier("test", "a"), 1)
    rg.insert(Identifier("test", "b"), 2)
    rg.insert(Identifier("test", "c"), 3)
    rg.insert_tag(Identifier("test", "1_to_2"), Identifier("test", "a"))
    rg.insert_tag(Identifier("test", "1_to_2"), Identifier("test", "b"))
    assert len(rg.get_tags(Identifier("test", "1_to_2"))) == 2


def test_get_missing_returns_none():
    rg = _abc_registry()
    assert rg.get(Identifier("test", "z")) is None
    assert rg.get_entry(Identifier("test", "z")) is None


def test_entries_follow_insertion_order():
    rg = _abc_registry()
    assert rg.get_entry(Identifier("test", "b")) == RegEntry(1)
    assert rg.lookup(RegEntry(2)) == 30
    assert rg.lookup_ident(RegEntry(0)) == Identifier("test", "a")
    assert rg.lookup(RegEntry(3)) is None
    assert list(rg.keys()) == [Identifier("test", n) for n in "abc"]
    assert [value for _, value in rg.entries()] == [10, 20, 30]


def test_reinsert_keeps_position():
    rg = _abc_registry()
    rg.insert(Identifier("test", "a"), 99)
    assert rg.get_entry(Identifier("test", "a")) == RegEntry(0)
    assert rg.lookup(RegEntry(0)) == 99
    assert len(rg) == 3


def test_map_replaces_value():
    rg = _abc_registry()
    rg.map(Identifier("test", "c"), lambda v: v + 1)
    assert rg.get(Identifier("test", "c")) == 31


def test_map_missing_key_raises():
    with pytest.raises(KeyError):
        _abc_registry().map(Identifier("test", "z"), lambda v: v)


def test_reg_entry_lookup():
    rg = _abc_registry()
    assert RegEntry(1).lookup(rg) == 20
    assert RegEntry(1).lookup(rg.freeze()) == 20


def test_tag_with_unknown_entry_is_empty():
    rg = _abc_registry()
    rg.insert_tag(Identifier("test", "t"), Identifier("test", "missing"))
    assert rg.get_tags(Identifier("test", "t")) == frozenset()
    assert rg.get_tags(Identifier("test", "other")) is None


def test_flatten_tags():
    rg = _abc_registry()
    rg.insert_tag(Identifier("test", "t"), Identifier("test", "c"))
    rg.insert_tag(Identifier("test", "t"), Identifier("test", "a"))
    assert rg.flatten_tags_for_packet() == [(Identifier("test", "t"), [0, 2])]


def test_clear_removes_values():
    rg = _abc_registry()
    rg.clear()
    assert len(rg) == 0
    assert rg.get(Identifier("test", "a")) is None


def test_reg_entry_round_trip():
    writer = PacketWriter()
    RegEntry(300).encode(writer)
    assert writer.to_bytes() == Var32(300).to_bytes()
    assert RegEntry.decode(PacketReader(writer.to_bytes())) == RegEntry(300)


def test_reg_entry_decode_negative_is_unsigned():
    entry = RegEntry.decode(PacketReader(Var32(-1).to_bytes()))
    assert entry.id == 0xFFFFFFFF


class _Named(RegValue):
    REGISTRY_ID = Identifier("test", "named")

    def __init__(self, name):
        self.name = name

    def to_registry_data_packet(self):
        return {"name": self.name}


def test_registry_data_entries():
    rg = Registry()
    rg.insert(Identifier("test", "x"), _Named("x"))
    rg.insert(Identifier("test", "y"), _Named("y"))
    assert rg.freeze().registry_data_entries() == [
        (Identifier("test", "x"), {"name": "x"}),
        (Identifier("test", "y"), {"name": "y"}),
    ]