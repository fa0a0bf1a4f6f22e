import pytest

from solong.mapcheck import (
    GameMap,
    MapError,
    check_extension,
    flood_fill,
    load_map,
    read_map,
    validate_map,
)

VALID = "1111111\n1P0C0E1\n1111111"


def _lines(text):
    rows = text.split("\n")
    return [row + "\n" for row in rows[:-1]] + [rows[-1]]


def _write(tmp_path, text, name="map.ber"):
    path = tmp_path / name
    path.write_bytes(text.encode("latin-1"))
    return path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("map.ber", True),
        ("maps/map.ber", True),
        ("./maps/level.ber", True),
        ("map.bert", False),
        ("map.be", False),
        ("map.txt", False),
        ("map.ber.ber", False),
        ("map", False),
    ],
)
def test_check_extension(path, expected):
    assert check_extension(path) is expected


def test_read_map_keeps_lines(tmp_path):
    path = _write(tmp_path, VALID)
    lines = read_map(path)
    assert "".join(lines) == VALID
    assert len(lines) == VALID.count("\n") + 1


def test_read_map_missing_file(tmp_path):
    with pytest.raises(MapError, match="Invalid map"):
        read_map(tmp_path / "absent.ber")


def test_read_map_empty_line(tmp_path):
    path = _write(tmp_path, "1111111\n\n1111111")
    with pytest.raises(MapError, match="Invalid map"):
        read_map(path)


def test_validate_valid_map():
    game = validate_map(_lines(VALID))
    assert isinstance(game, GameMap)
    px, py = game.player
    ex, ey = game.exit
    assert game.grid[py][px] == "P"
    assert game.grid[ey][ex] == "E"
    assert game.collectibles == VALID.count("C")
    assert game.height == len(game.grid)
    assert all(len(row) == game.width for row in game.grid)
    assert ["".join(row) for row in game.grid] == VALID.split("\n")


def test_trailing_newline_is_not_rectangular():
    with pytest.raises(MapError, match="Map isn't rectangular"):
        validate_map(_lines(VALID + "\n")[:-1])


def test_ragged_rows():
    with pytest.raises(MapError, match="Map isn't rectangular"):
        validate_map(_lines("1111111\n1P0C0E1111\n1111111"))


def test_single_row_is_not_rectangular():
    with pytest.raises(MapError, match="Map isn't rectangular"):
        validate_map(["1111"])


def test_invalid_object():
    with pytest.raises(MapError, match="Invalid object in map"):
        validate_map(_lines("1111111\n1P0X0E1\n1111111"))


def test_no_collectibles():
    with pytest.raises(MapError, match="No collectibles"):
        validate_map(_lines("1111111\n1P000E1\n1111111"))


def test_many_exits():
    with pytest.raises(MapError, match="No exit or many exits"):
        validate_map(_lines("1111111\n1PECE01\n1111111"))


def test_many_players():
    with pytest.raises(MapError, match="No player or many players"):
        validate_map(_lines("1111111\n1PPC0E1\n1111111"))


def test_open_walls():
    with pytest.raises(MapError, match="Map isn't surrounded by walls"):
        validate_map(_lines("1111111\n0P0C0E1\n1111111"))


def test_unreachable_collectible():
    with pytest.raises(MapError, match="Invalid Path"):
        validate_map(_lines("1111111\n1P0E1C1\n1111111"))


def test_collectible_behind_exit():
    with pytest.raises(MapError, match="Invalid Path"):
        validate_map(_lines("111111\n1PEC01\n111111"))


def test_flood_fill_stops_at_exit():
    grid = ["11111", "1PEC1", "11111"]
    assert flood_fill(grid, (1, 1)) == (0, 1)


def test_flood_fill_reaches_everything_open():
    grid = VALID.split("\n")
    collectibles, exits = flood_fill(grid, (1, 1))
    assert collectibles == VALID.count("C")
    assert exits == VALID.count("E")


def test_flood_fill_does_not_change_grid():
    grid = [list(row) for row in VALID.split("\n")]
    before = [row[:] for row in grid]
    flood_fill(grid, (1, 1))
    assert grid == before


def test_load_map_round_trip(tmp_path):
    path = _write(tmp_path, VALID)
    game = load_map(path)
    assert ["".join(row) for row in game.grid] == VALID.split("\n")
    assert game == validate_map(read_map(path))


def test_load_map_rejects_bad_map(tmp_path):
    path = _write(tmp_path, "1111111\n1P000E1\n1111111")
    with pytest.raises(MapError, match="No collectibles"):
        load_map(path)