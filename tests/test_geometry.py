import math

import pytest

from blockwire.geometry import Angle, BlockPos, ChunkSectionPosition, Vec3d
from blockwire.wire import EndOfBufferError, PacketReader, PacketWriter


def _encode(value):
    writer = PacketWriter()
    value.encode(writer)
    return writer.to_bytes()


@pytest.mark.parametrize("frac", [-2.75, -0.5, 0.0, 0.3, 1.0, 3.25])
def test_of_frac_wraps_into_unit_interval(frac):
    angle = Angle.of_frac(frac)
    assert 0.0 <= angle.as_frac() < 1.0
    assert math.isclose(angle.as_frac(), Angle.of_frac(frac + 1.0).as_frac(), abs_tol=1e-12)


@pytest.mark.parametrize("deg", [0.0, 45.0, 90.0, 180.0, 270.0])
def test_degrees_and_radians_agree(deg):
    angle = Angle.of_deg(deg)
    assert math.isclose(angle.as_rad(), math.radians(deg), abs_tol=1e-12)
    assert math.isclose(Angle.of_rad(angle.as_rad()).as_deg(), deg, abs_tol=1e-9)


def test_of_rad_does_not_wrap():
    rad = 2 * math.tau
    assert math.isclose(Angle.of_rad(rad).as_rad(), rad)


@pytest.mark.parametrize("step", [0, 1, 64, 128, 255])
def test_angle_round_trip(step):
    angle = Angle.of_frac(step / 256)
    data = _encode(angle)
    assert len(data) == 1
    assert Angle.decode(PacketReader(data)) == angle


def test_angle_encode_saturates():
    assert _encode(Angle.of_deg(720.0)) == bytes([255])
    assert _encode(Angle.of_deg(-90.0)) == bytes([0])


@pytest.mark.parametrize("pos", [BlockPos(0, 0, 0), BlockPos(12, -64, 30), BlockPos(2**25 - 1, 2047, 2**21 - 1), BlockPos(5, -2048, 7)])
def test_block_pos_round_trip(pos):
    data = _encode(pos)
    assert len(data) == 8
    assert BlockPos.decode(PacketReader(data)) == pos


def test_block_pos_origin_is_zero_bytes():
    assert _encode(BlockPos(0, 0, 0)) == bytes(8)


@pytest.mark.parametrize("pos", [ChunkSectionPosition(0, 0, 0), ChunkSectionPosition(3, 9, 17), ChunkSectionPosition(2**21 - 1, 2**20 - 1, 2**17 - 1)])
def test_chunk_section_position_round_trip(pos):
    data = _encode(pos)
    assert len(data) == 8
    assert ChunkSectionPosition.decode(PacketReader(data)) == pos


def test_vec3d_round_trip():
    vec = Vec3d(1.5, -2.25, 1e10)
    data = _encode(vec)
    assert len(data) == 24
    assert Vec3d.decode(PacketReader(data)) == vec


@pytest.mark.parametrize("cls", [BlockPos, ChunkSectionPosition, Vec3d, Angle])
def test_decode_empty_buffer_raises(cls):
    with pytest.raises(EndOfBufferError):
        cls.decode(PacketReader(b""))