import pytest

from zemeroth.hexmap import (
    Dir,
    HexMap,
    PosCube,
    PosHex,
    cube_round,
    cube_to_hex,
    dirs,
    distance_hex,
    dump_map,
    hex_positions,
    hex_round,
    hex_to_cube,
    is_inboard,
    radius_to_diameter,
)


def test_map_height():
    hex_map = HexMap(3, 0)
    assert hex_map.height() == 7


def test_radius_to_diameter():
    assert radius_to_diameter(3) == 7
    assert radius_to_diameter(0) == 1


def test_hex_cube_round_trip():
    pos = PosHex(2, -3)
    cube = hex_to_cube(pos)
    assert cube.x + cube.y + cube.z == 0
    assert cube_to_hex(cube) == pos


def test_distance():
    assert distance_hex(PosHex(0, 0), PosHex(2, -1)) == 2
    assert distance_hex(PosHex(2, -1), PosHex(0, 0)) == 2
    assert distance_hex(PosHex(1, 1), PosHex(1, 1)) == 0


def test_is_inboard():
    assert is_inboard(1, PosHex(1, -1))
    assert not is_inboard(1, PosHex(1, 1))


def test_hex_round():
    assert hex_round(PosHex(0.1, -0.1)) == PosHex(0, 0)
    assert hex_round(PosHex(0.9, 0.05)) == PosHex(1, 0)


def test_cube_round_half_away_from_zero():
    assert cube_round(PosCube(0.5, -0.5, 0.0)) == PosCube(1, -1, 0)


@pytest.mark.parametrize("radius, count", [(1, 7), (2, 19), (3, 37)])
def test_hex_positions_count(radius, count):
    positions = list(hex_positions(radius))
    assert len(positions) == count
    assert len(set(positions)) == count
    assert all(is_inboard(radius, p) for p in positions)


def test_hex_positions_order():
    assert list(hex_positions(1)) == [
        PosHex(0, -1),
        PosHex(1, -1),
        PosHex(-1, 0),
        PosHex(0, 0),
        PosHex(1, 0),
        PosHex(-1, 1),
        PosHex(0, 1),
    ]


def test_map_iter_matches_positions():
    hex_map = HexMap(2, 0)
    assert list(hex_map) == list(hex_positions(2))


def test_tile_and_set_tile():
    hex_map = HexMap(2, "plain")
    pos = PosHex(-1, 2)
    assert hex_map.tile(pos) == "plain"
    hex_map.set_tile(pos, "rocks")
    assert hex_map.tile(pos) == "rocks"
    assert hex_map.tile(PosHex(1, -2)) == "plain"


def test_tiles_are_independent():
    hex_map = HexMap(2, 0)
    for n, pos in enumerate(hex_map):
        hex_map.set_tile(pos, n)
    assert [hex_map.tile(p) for p in hex_map] == list(range(19))


def test_tile_outside_raises():
    hex_map = HexMap(1, 0)
    with pytest.raises(IndexError):
        hex_map.tile(PosHex(2, 0))
    with pytest.raises(IndexError):
        hex_map.set_tile(PosHex(1, 1), 5)


def test_dir_int_round_trip():
    for n in range(6):
        assert Dir.from_int(n).to_int() == n


def test_dir_from_int_out_of_range():
    with pytest.raises(ValueError):
        Dir.from_int(6)
    with pytest.raises(ValueError):
        Dir.from_int(-1)


def test_dirs_order():
    assert list(dirs()) == [
        Dir.SOUTH_EAST,
        Dir.EAST,
        Dir.NORTH_EAST,
        Dir.NORTH_WEST,
        Dir.WEST,
        Dir.SOUTH_WEST,
    ]


def test_neighbor_and_direction_round_trip():
    origin = PosHex(1, -1)
    for direction in dirs():
        neighbor = Dir.get_neighbor_pos(origin, direction)
        assert distance_hex(origin, neighbor) == 1
        assert Dir.get_dir_from_to(origin, neighbor) == direction


def test_neighbor_pos_value():
    assert Dir.get_neighbor_pos(PosHex(0, 0), Dir.SOUTH_WEST) == PosHex(0, 1)


def test_get_dir_from_to_not_adjacent():
    with pytest.raises(ValueError):
        Dir.get_dir_from_to(PosHex(0, 0), PosHex(0, 2))


def test_dump_map(capsys):
    dump_map(1, lambda pos: "A" if pos == PosHex(0, 0) else "_")
    out = capsys.readouterr().out
    assert out == "  _ _ \n _ A _ \n  _ _   \n\n"