import pytest

from blockwire.ident import Identifier
from blockwire.sequences import ConsumeAllVec, LengthPrefixHashMap, LengthPrefixVec
from blockwire.wire import (
    EndOfBufferError,
    InvalidDataError,
    PacketReader,
    PacketWriter,
    Var32,
    Var64,
)


def _encoded(value, *args):
    writer = PacketWriter()
    value.encode(writer, *args)
    return writer.to_bytes()


def test_length_prefix_vec_wire_bytes():
    data = _encoded(LengthPrefixVec([Var32(1), Var32(2)]))
    assert data == b"\x02\x01\x02"


def test_length_prefix_vec_round_trip_identifiers():
    original = LengthPrefixVec([Identifier("test", "a"), Identifier.vanilla("stone")])
    reader = PacketReader(_encoded(original))
    decoded = LengthPrefixVec.decode(reader, Identifier.decode)
    assert decoded == original
    assert reader.remaining() == 0


def test_length_prefix_vec_custom_item_codec():
    original = LengthPrefixVec([-5, 0, 70000])
    data = _encoded(original, lambda item, w: w.write_i32(item))
    decoded = LengthPrefixVec.decode(PacketReader(data), lambda r: r.read_i32())
    assert decoded == [-5, 0, 70000]


def test_length_prefix_vec_empty():
    data = _encoded(LengthPrefixVec())
    assert data == Var32(0).to_bytes()
    assert LengthPrefixVec.decode(PacketReader(data), Var32.decode) == []


def test_length_prefix_vec_negative_length():
    with pytest.raises(InvalidDataError):
        LengthPrefixVec.decode(PacketReader(Var32(-1).to_bytes()), Var32.decode)


def test_length_prefix_vec_truncated():
    data = _encoded(LengthPrefixVec([Var32(1), Var32(2), Var32(3)]))
    with pytest.raises(EndOfBufferError):
        LengthPrefixVec.decode(PacketReader(data[:-1]), Var32.decode)


def test_length_prefix_vec_prefix_override():
    class LongPrefixed(LengthPrefixVec):
        prefix = Var64

    original = LongPrefixed([Var32(7)])
    data = _encoded(original)
    assert data.startswith(Var64(1).to_bytes())
    decoded = LongPrefixed.decode(PacketReader(data), Var32.decode)
    assert isinstance(decoded, LongPrefixed)
    assert decoded == [Var32(7)]


def test_length_prefix_vec_repr():
    assert repr(LengthPrefixVec([1])) == "LengthPrefixVec[1]"


def test_consume_all_vec_round_trip():
    original = ConsumeAllVec([Var32(300), Var32(-1), Var32(0)])
    data = _encoded(original)
    assert data == b"".join(v.to_bytes() for v in original)
    reader = PacketReader(data)
    assert ConsumeAllVec.decode(reader, Var32.decode) == original
    assert reader.remaining() == 0


def test_consume_all_vec_empty_buffer():
    assert ConsumeAllVec.decode(PacketReader(b""), Var32.decode) == []


def test_consume_all_vec_propagates_invalid_data():
    data = Var32(1).to_bytes() + b"\xff" * 5
    with pytest.raises(InvalidDataError):
        ConsumeAllVec.decode(PacketReader(data), Var32.decode)


def test_consume_all_vec_stops_at_partial_item():
    data = Var32(4).to_bytes() + b"\x80"
    assert ConsumeAllVec.decode(PacketReader(data), Var32.decode) == [Var32(4)]


def test_hashmap_round_trip():
    original = LengthPrefixHashMap({Identifier("a", "b"): Var32(1), Identifier.vanilla("c"): Var32(2)})
    data = _encoded(original)
    reader = PacketReader(data)
    decoded = LengthPrefixHashMap.decode(reader, Identifier.decode, Var32.decode)
    assert decoded == original
    assert reader.remaining() == 0


def test_hashmap_custom_codecs_and_prefix():
    original = LengthPrefixHashMap({"x": 1, "y": 2})
    data = _encoded(
        original,
        lambda k, w: w.write_string(k),
        lambda v, w: w.write_i64(v),
    )
    assert data.startswith(Var32(2).to_bytes())
    decoded = LengthPrefixHashMap.decode(
        PacketReader(data), lambda r: r.read_string(), lambda r: r.read_i64()
    )
    assert decoded == {"x": 1, "y": 2}


def test_hashmap_negative_length():
    with pytest.raises(InvalidDataError):
        LengthPrefixHashMap.decode(PacketReader(Var32(-3).to_bytes()), Var32.decode, Var32.decode)